from __future__ import annotations

from typing import Any, Optional

from argcase_platform.core.enumerate.suite import count_cases
from argcase_platform.core.errors import CaseConfigLintError
from argcase_platform.core.model import ArgConfig


# Lint rules:
# - L_NO_INVALID_CASES: arg has no invalid samples, so its faulted plan is empty
# - L_NO_VALID_CASES: arg has no valid samples (nothing to pin in other args' faulted plans)
# - L_CASE_BLOWUP: predicted all-valid case count exceeds max_cases

DEFAULT_MAX_CASES = 10_000


def lint_config(config: dict[str, Any], *, max_cases: int = DEFAULT_MAX_CASES) -> list[CaseConfigLintError]:
    """Lint an argument config.

    Lint runs *in addition to* validation. It is allowed to operate on
    partially-invalid inputs (best effort) and report configs that validate
    but would generate vacuous or oversized plans.
    """

    file = _cast_optional_str(config.get("__file__"))

    args = config.get("args")
    if not isinstance(args, list):
        # Let validator handle shape.
        return []

    errors: list[CaseConfigLintError] = []
    countable: list[ArgConfig] = []
    all_countable = True

    for i, raw in enumerate(args):
        if not isinstance(raw, dict):
            all_countable = False
            continue
        arg_path = f"args[{i}]"
        name = raw.get("name") if isinstance(raw.get("name"), str) else arg_path

        invalid_cases = raw.get("invalid_cases")
        if not isinstance(invalid_cases, list) or not invalid_cases:
            errors.append(
                CaseConfigLintError(
                    code="L_NO_INVALID_CASES",
                    message=f"arg {name} has no invalid_cases; its faulted plan generates nothing",
                    file=file,
                    path=f"{arg_path}.invalid_cases",
                )
            )

        valid_cases = raw.get("valid_cases")
        optional = raw.get("optional") is True
        if isinstance(valid_cases, list) and not valid_cases:
            errors.append(
                CaseConfigLintError(
                    code="L_NO_VALID_CASES",
                    message=f"arg {name} has no valid_cases; it cannot be pinned in faulted plans",
                    file=file,
                    path=f"{arg_path}.valid_cases",
                )
            )

        if isinstance(valid_cases, list):
            countable.append(ArgConfig(name=str(name), valid_cases=tuple(valid_cases), optional=optional))
        else:
            all_countable = False

    if all_countable and countable:
        predicted = count_cases(countable)
        if predicted > max_cases:
            errors.append(
                CaseConfigLintError(
                    code="L_CASE_BLOWUP",
                    message=f"all-valid plan would generate {predicted} cases (max {max_cases})",
                    file=file,
                    path="args",
                )
            )

    return errors


def _cast_optional_str(v: Any) -> Optional[str]:
    return v if isinstance(v, str) else None
