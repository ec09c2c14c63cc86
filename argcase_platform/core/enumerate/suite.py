from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from argcase_platform.core.enumerate.contracts import StrategyLike
from argcase_platform.core.enumerate.enumerate_cases import enumerate_cases
from argcase_platform.core.model import ArgConfigSequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CasePlan:
    """Accept/reject matrix for one function.

    ``invalid`` has one entry per argument name, in config order; arguments
    without invalid samples map to an empty list.
    """

    valid: list[Any]
    invalid: dict[str, list[Any]] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.valid) + sum(len(v) for v in self.invalid.values())


def build_case_plan(strategy: StrategyLike) -> Callable[[ArgConfigSequence], CasePlan]:
    """Return a function running the all-valid plan plus one faulted plan per argument."""
    generate = enumerate_cases(strategy)

    def _build(configs: ArgConfigSequence) -> CasePlan:
        valid = generate(configs)
        invalid: dict[str, list[Any]] = {}
        for i, conf in enumerate(configs):
            invalid[conf.name] = generate(configs, i)

        plan = CasePlan(valid=valid, invalid=invalid)
        logger.info(
            "built case plan: %d valid, %d invalid across %d args",
            len(valid),
            plan.total - len(valid),
            len(configs),
        )
        return plan

    return _build


def count_cases(configs: ArgConfigSequence, faulted_index: Optional[int] = None) -> int:
    """Predict ``len(enumerate_cases(s)(configs, faulted_index))`` for the bundled strategies.

    Assumes extending an empty list yields one singleton, a required slot keeps
    the count per candidate and an optional slot doubles it.
    """
    if faulted_index is None or faulted_index < 0:
        n = 0
        for conf in configs:
            n = len(conf.valid_cases) * _extended_size(n, conf.optional)
        return n

    if faulted_index >= len(configs) or not configs[faulted_index].invalid_cases:
        return 0

    n = 0
    for i, conf in enumerate(configs):
        if i == faulted_index:
            n = len(conf.invalid_cases or ()) * _extended_size(n, conf.optional)
        else:
            if not conf.valid_cases:
                raise IndexError(f"argument {conf.name!r} has no valid case to pin")
            n = _extended_size(n, conf.optional)
    return n


def unpinned_args(configs: ArgConfigSequence, faulted_indices: Iterable[int]) -> list[int]:
    """Indices of args the given faulted plans must pin but that have no valid case.

    Negative, out-of-range and vacuous targets pin nothing, matching what
    ``enumerate_cases`` does with them.
    """
    missing: set[int] = set()
    for t in faulted_indices:
        if t < 0 or t >= len(configs) or not configs[t].invalid_cases:
            continue
        missing.update(j for j, conf in enumerate(configs) if j != t and not conf.valid_cases)
    return sorted(missing)


def _extended_size(n: int, optional: bool) -> int:
    size = max(n, 1)
    if optional:
        size += n
    return size
