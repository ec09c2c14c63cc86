from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional


@dataclass(frozen=True)
class CaseConfigError(Exception):
    """Coded error about an argument config, located by file and arg path.

    ``path`` uses the config's own addressing (``args[2].valid_cases``), so a
    message points at the sample list that needs fixing.
    """

    code: str
    message: str
    file: Optional[str] = None
    path: Optional[str] = None

    source: ClassVar[str] = "config"
    severity: ClassVar[str] = "error"

    def __str__(self) -> str:
        loc = ":".join(p for p in (self.file, self.path) if p) or "<config>"
        return f"{loc}: {self.code}: {self.message}"

    def as_item(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "file": self.file,
            "path": self.path,
            "severity": self.severity,
            "source": self.source,
        }


class CaseConfigLoadError(CaseConfigError):
    source = "load"


class CaseConfigValidationError(CaseConfigError):
    source = "validate"


class CaseConfigLintError(CaseConfigValidationError):
    """Config is valid but would generate a vacuous, unpinnable or oversized plan."""

    source = "lint"
