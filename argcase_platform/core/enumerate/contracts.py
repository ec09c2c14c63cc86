from __future__ import annotations

from typing import Any, Callable, Protocol, Union

from argcase_platform.core.model import ArgConfig


class CaseExtensionStrategy(Protocol):
    """Merges one candidate value into every existing case.

    ``extend`` must not mutate ``cases`` and must return a new list: the fold
    concatenates results from several calls over the same input. On an empty
    ``cases`` it defines the base case (typically one singleton per value).
    """

    def extend(self, cases: list[Any], value: Any) -> list[Any]: ...


ExtendFn = Callable[[list[Any], Any], list[Any]]

StrategyLike = Union[CaseExtensionStrategy, ExtendFn]


def resolve_extend(strategy: StrategyLike) -> ExtendFn:
    """Return the bare ``extend`` callable for a strategy object or function."""
    extend = getattr(strategy, "extend", None)
    if callable(extend):
        return extend
    if callable(strategy):
        return strategy
    raise TypeError(f"not a case extension strategy: {strategy!r}")


def bind_strategy(strategy: StrategyLike, arg: ArgConfig) -> StrategyLike:
    """Let a strategy specialize itself for one argument slot.

    Strategies that need the slot (its name, its optional flag) expose
    ``bind(arg)``; everything else is used as-is for every slot.
    """
    bind = getattr(strategy, "bind", None)
    if callable(bind):
        return bind(arg)
    return strategy
