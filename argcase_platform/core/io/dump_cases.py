from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import yaml

from argcase_platform.core.enumerate.suite import CasePlan


OutputFormat = Literal["json", "yaml"]


def cases_to_data(cases: list[Any]) -> list[Any]:
    """Convert cases into plain JSON/YAML-safe structures (tuples become lists)."""
    return [_plain(c) for c in cases]


def plan_to_data(plan: CasePlan) -> dict[str, Any]:
    return {
        "valid": cases_to_data(plan.valid),
        "invalid": {name: cases_to_data(cases) for name, cases in plan.invalid.items()},
    }


def render(data: Any, fmt: OutputFormat) -> str:
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False, allow_unicode=True)
    return json.dumps(data, indent=2, default=str)


def write_output(path: str, text: str) -> None:
    p = Path(path)
    if str(p.parent) not in (".", ""):
        p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")


def _plain(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value
