"""Fold an argument-config sequence into a flat list of cases.

Two plans are supported:

- all-valid (``faulted_index`` is None or negative): every slot is
  cross-product expanded against its ``valid_cases``.
- single-faulted (``faulted_index >= 0``): the faulted slot is expanded
  against its ``invalid_cases`` and every other slot is pinned to its first
  valid value, so the result grows linearly with the invalid samples.

The fold never inspects a case. It hands case lists to the strategy and
concatenates what comes back, so output order follows config order and then
candidate order.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from argcase_platform.core.enumerate.contracts import StrategyLike, bind_strategy, resolve_extend
from argcase_platform.core.model import ArgConfig, ArgConfigSequence

logger = logging.getLogger(__name__)


ExpandFn = Callable[[list[Any], Sequence[Any]], list[Any]]
EnumerateFn = Callable[..., list[Any]]


def expand_all(strategy: StrategyLike) -> ExpandFn:
    """Return a function that extends ``cases`` once per candidate and concatenates.

    Example (positional tuples):
      expand_all(PositionalCaseStrategy())([], [2, 3])            -> [(2,), (3,)]
      expand_all(PositionalCaseStrategy())([(0,), (1,)], [2, 3])  -> [(0, 2), (1, 2), (0, 3), (1, 3)]

    No candidates means no cases, even if ``cases`` is non-empty.
    """
    extend = resolve_extend(strategy)

    def _expand(cases: list[Any], candidates: Sequence[Any]) -> list[Any]:
        expanded: list[Any] = []
        for value in candidates:
            expanded.extend(extend(cases, value))
        return expanded

    return _expand


def enumerate_cases(strategy: StrategyLike) -> EnumerateFn:
    """Return the case generator for ``strategy``.

    The returned callable takes ``(configs, faulted_index=None)``. A faulted
    index that is out of range, or that points at an argument without invalid
    samples, yields ``[]`` without touching the other slots. Errors raised by
    the strategy propagate unchanged.
    """

    def _enumerate(configs: ArgConfigSequence, faulted_index: Optional[int] = None) -> list[Any]:
        if faulted_index is None or faulted_index < 0:
            logger.debug("enumerating all-valid plan over %d slots", len(configs))
            return _fold_all_valid(strategy, configs)

        faulted = _resolve_faulted(configs, faulted_index)
        if faulted is None or not faulted.invalid_cases:
            logger.debug("faulted index %d has no invalid cases; plan is empty", faulted_index)
            return []

        logger.debug(
            "enumerating faulted plan over %d slots (faulted=%d, name=%s)",
            len(configs),
            faulted_index,
            faulted.name,
        )
        cases: list[Any] = []
        for i, conf in enumerate(configs):
            slot = bind_strategy(strategy, conf)
            if i == faulted_index:
                cases = expand_all(slot)(cases, faulted.invalid_cases)
            else:
                cases = resolve_extend(slot)(cases, conf.valid_cases[0])
        return cases

    return _enumerate


def _fold_all_valid(strategy: StrategyLike, configs: ArgConfigSequence) -> list[Any]:
    cases: list[Any] = []
    for conf in configs:
        cases = expand_all(bind_strategy(strategy, conf))(cases, conf.valid_cases)
    return cases


def _resolve_faulted(configs: ArgConfigSequence, faulted_index: int) -> Optional[ArgConfig]:
    if faulted_index >= len(configs):
        return None
    return configs[faulted_index]
