from __future__ import annotations

from typing import Any, Iterable, Optional, cast

from argcase_platform.core.errors import CaseConfigValidationError
from argcase_platform.core.model import ArgConfig, CaseConfig


def validate_config(config: dict[str, Any]) -> tuple[Optional[CaseConfig], list[CaseConfigValidationError]]:
    """Validate an argument config document.

    Returns (config, errors). Config is None when errors exist.
    """

    file = cast(Optional[str], config.get("__file__"))
    errors: list[CaseConfigValidationError] = []

    schema_version = config.get("schema_version")
    if not isinstance(schema_version, str) or not schema_version.strip():
        errors.append(
            CaseConfigValidationError(
                code="E_REQUIRED_FIELD",
                message="schema_version is required and must be a non-empty string",
                file=file,
                path="schema_version",
            )
        )

    function = config.get("function")
    if function is not None and not isinstance(function, str):
        errors.append(
            CaseConfigValidationError(
                code="E_INVALID_TYPE",
                message="function must be a string",
                file=file,
                path="function",
            )
        )

    args = config.get("args")
    if not isinstance(args, list):
        errors.append(
            CaseConfigValidationError(
                code="E_REQUIRED_FIELD",
                message="args is required and must be an array",
                file=file,
                path="args",
            )
        )
        return None, _sorted(errors)

    parsed: list[ArgConfig] = []
    seen_names: set[str] = set()

    for i, raw in enumerate(args):
        arg_path = f"args[{i}]"
        if not isinstance(raw, dict):
            errors.append(
                CaseConfigValidationError(
                    code="E_INVALID_TYPE",
                    message="arg must be an object",
                    file=file,
                    path=arg_path,
                )
            )
            continue

        name = raw.get("name")
        if not isinstance(name, str) or not name.strip():
            errors.append(
                CaseConfigValidationError(
                    code="E_REQUIRED_FIELD",
                    message="name is required and must be a non-empty string",
                    file=file,
                    path=f"{arg_path}.name",
                )
            )
            continue

        if name in seen_names:
            errors.append(
                CaseConfigValidationError(
                    code="E_DUPLICATE_NAME",
                    message=f"duplicate arg name: {name}",
                    file=file,
                    path=f"{arg_path}.name",
                )
            )
            continue
        seen_names.add(name)

        valid_cases = raw.get("valid_cases")
        if not isinstance(valid_cases, list):
            errors.append(
                CaseConfigValidationError(
                    code="E_REQUIRED_FIELD",
                    message="valid_cases is required and must be an array",
                    file=file,
                    path=f"{arg_path}.valid_cases",
                )
            )
            continue

        invalid_cases = raw.get("invalid_cases")
        if invalid_cases is not None and not isinstance(invalid_cases, list):
            errors.append(
                CaseConfigValidationError(
                    code="E_INVALID_TYPE",
                    message="invalid_cases must be an array",
                    file=file,
                    path=f"{arg_path}.invalid_cases",
                )
            )
            continue

        optional = raw.get("optional", False)
        if not isinstance(optional, bool):
            errors.append(
                CaseConfigValidationError(
                    code="E_INVALID_TYPE",
                    message="optional must be a boolean",
                    file=file,
                    path=f"{arg_path}.optional",
                )
            )
            continue

        parsed.append(
            ArgConfig(
                name=name,
                valid_cases=tuple(valid_cases),
                invalid_cases=tuple(invalid_cases) if invalid_cases is not None else None,
                optional=optional,
            )
        )

    if errors:
        return None, _sorted(errors)

    return (
        CaseConfig(
            schema_version=cast(str, schema_version),
            args=tuple(parsed),
            function=cast(Optional[str], function),
            file=file,
        ),
        [],
    )


def summarize_config(config: CaseConfig) -> str:
    optional = [a.name for a in config.args if a.optional]
    header = f"OK: {len(config.args)} args"
    if config.function:
        header += f" for {config.function}"
    lines = [header]
    for a in config.args:
        n_invalid = len(a.invalid_cases) if a.invalid_cases is not None else 0
        lines.append(f"- {a.name}: valid={len(a.valid_cases)}, invalid={n_invalid}")
    lines.append("Optional: " + (", ".join(optional) if optional else "-"))
    return "\n".join(lines)


def _sorted(errors: Iterable[CaseConfigValidationError]) -> list[CaseConfigValidationError]:
    return sorted(
        list(errors),
        key=lambda e: (
            e.file or "",
            e.path or "",
            e.code,
        ),
    )
