from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional

from argcase_platform.core.enumerate.contracts import StrategyLike, resolve_extend
from argcase_platform.core.model import ArgConfig


@dataclass(frozen=True)
class OptionalCaseStrategy:
    """Branch an optional slot: every case without the value, then every case with it."""

    inner: StrategyLike

    def extend(self, cases: list[Any], value: Any) -> list[Any]:
        return [_copy_case(c) for c in cases] + resolve_extend(self.inner)(cases, value)


@dataclass(frozen=True)
class PositionalCaseStrategy:
    """Cases are tuples of argument values in call order."""

    def extend(self, cases: list[tuple[Any, ...]], value: Any) -> list[tuple[Any, ...]]:
        if not cases:
            return [(value,)]
        return [c + (value,) for c in cases]

    def bind(self, arg: ArgConfig) -> StrategyLike:
        return _branch_if_optional(self, arg)


@dataclass(frozen=True)
class ListCaseStrategy:
    """Cases are lists of argument values in call order."""

    def extend(self, cases: list[list[Any]], value: Any) -> list[list[Any]]:
        if not cases:
            return [[value]]
        return [[*c, value] for c in cases]

    def bind(self, arg: ArgConfig) -> StrategyLike:
        return _branch_if_optional(self, arg)


@dataclass(frozen=True)
class NamedCaseStrategy:
    """Cases are dicts keyed by argument name (keyword calls).

    Must be bound to a slot before use; the fold does this via ``bind``.
    """

    name: Optional[str] = None

    def extend(self, cases: list[dict[str, Any]], value: Any) -> list[dict[str, Any]]:
        if self.name is None:
            raise ValueError("NamedCaseStrategy.extend called before bind(); argument name is unknown")
        if not cases:
            return [{self.name: value}]
        return [{**c, self.name: value} for c in cases]

    def bind(self, arg: ArgConfig) -> StrategyLike:
        return _branch_if_optional(replace(self, name=arg.name), arg)


STRATEGIES: dict[str, type] = {
    "positional": PositionalCaseStrategy,
    "list": ListCaseStrategy,
    "named": NamedCaseStrategy,
}


def get_strategy(style: str) -> StrategyLike:
    cls = STRATEGIES.get(style)
    if cls is None:
        raise ValueError(f"unknown case style: {style} (choose one of: {', '.join(sorted(STRATEGIES))})")
    return cls()


def _branch_if_optional(strategy: StrategyLike, arg: ArgConfig) -> StrategyLike:
    if arg.optional:
        return OptionalCaseStrategy(inner=strategy)
    return strategy


def _copy_case(case: Any) -> Any:
    if isinstance(case, dict):
        return dict(case)
    if isinstance(case, list):
        return list(case)
    return case
