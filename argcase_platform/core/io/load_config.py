"""Read an argument config document from disk.

Two spellings of ``args`` are accepted and normalized to the list form:

    args:                          args:
      - name: email                  email:
        valid_cases: [...]             valid_cases: [...]

The mapping form keeps YAML/JSON key order, which becomes call order.
Shape checking of the individual entries belongs to the validator.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import yaml

from argcase_platform.core.errors import CaseConfigLoadError


TOP_LEVEL_KEYS = ("schema_version", "function", "args")

_PARSERS: dict[str, tuple[str, Callable[[str], Any]]] = {
    ".yaml": ("E_YAML_PARSE", yaml.safe_load),
    ".yml": ("E_YAML_PARSE", yaml.safe_load),
    ".json": ("E_JSON_PARSE", json.loads),
}


def load_config(path: str) -> dict[str, Any]:
    """Load an arg config file into a dict with ``args`` as a list and ``__file__`` set."""
    p = Path(path)
    file = str(p)
    if not p.is_file():
        raise CaseConfigLoadError(code="E_FILE_NOT_FOUND", message="arg config file does not exist", file=file)

    parser = _PARSERS.get(p.suffix.lower())
    if parser is None:
        raise CaseConfigLoadError(
            code="E_UNSUPPORTED_FORMAT",
            message=f"arg configs must be one of: {', '.join(sorted(_PARSERS))}",
            file=file,
        )
    parse_code, parse = parser

    try:
        data = parse(p.read_text(encoding="utf-8"))
    except (yaml.YAMLError, ValueError) as e:
        raise CaseConfigLoadError(code=parse_code, message=str(e), file=file) from e

    if not isinstance(data, dict):
        raise CaseConfigLoadError(
            code="E_INVALID_TOP_LEVEL",
            message="arg config must be a mapping with schema_version and args",
            file=file,
        )

    unknown = sorted(str(k) for k in data if k not in TOP_LEVEL_KEYS)
    if unknown:
        raise CaseConfigLoadError(
            code="E_UNKNOWN_KEY",
            message=f"unknown top-level keys: {', '.join(unknown)} (allowed: {', '.join(TOP_LEVEL_KEYS)})",
            file=file,
            path=unknown[0],
        )

    config: dict[str, Any] = {key: data[key] for key in TOP_LEVEL_KEYS if key in data}
    config.setdefault("schema_version", None)
    config["args"] = _normalize_args(data.get("args"))
    config["__file__"] = file
    return config


def _normalize_args(args: Any) -> Any:
    if not isinstance(args, dict):
        return args
    entries: list[Any] = []
    for name, entry in args.items():
        if isinstance(entry, dict):
            entries.append({"name": name, **entry})
        elif entry is None:
            entries.append({"name": name})
        else:
            entries.append(entry)
    return entries
