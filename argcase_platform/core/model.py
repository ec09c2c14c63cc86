from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, TypeVar


C = TypeVar("C")


@dataclass(frozen=True)
class ArgConfig:
    """One function argument, in call order.

    ``name`` is documentation only; the enumeration fold never reads it.
    ``invalid_cases=None`` means no invalid samples were given at all.
    ``optional`` is interpreted by extension strategies, not by the fold.
    """

    name: str
    valid_cases: tuple[Any, ...] = ()
    invalid_cases: Optional[tuple[Any, ...]] = ()
    optional: bool = False


ArgConfigSequence = Sequence[ArgConfig]


@dataclass(frozen=True)
class CaseConfig:
    schema_version: str
    args: tuple[ArgConfig, ...]
    function: Optional[str] = None
    file: Optional[str] = None

    def index_of(self, name: str) -> Optional[int]:
        for i, arg in enumerate(self.args):
            if arg.name == name:
                return i
        return None
