"""
Health Check Data Models

Shared data structures for discovery, execution and reporting:
- CheckEntry is what the catalog produces and the runner consumes
- RunSummary is the per-check warn/error tally
- InvokeResult is the success-or-error value of the fault boundary
- HealthReport is the finished document handed to a host
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Any


# === Enums ===

class CheckKind(Enum):
    """Physical convention a check was discovered under."""
    NATIVE = "native"       # <root>/autoload/health/<name>.py
    SCRIPTED = "scripted"   # <root>/python/**/<name>/health{.py,/__init__.py}
    MISSING = "missing"     # Requested name with no module behind it


class Status(Enum):
    """Status of a single report line."""
    NONE = ""
    OK = "OK"
    WARN = "WARNING"
    ERROR = "ERROR"


# === Catalog ===

@dataclass(frozen=True)
class CheckEntry:
    """
    One discovered (or missing) healthcheck.

    Attributes:
        name: Canonical dotted name, e.g. "foo.bar"
        kind: NATIVE, SCRIPTED or MISSING
        location: Normalized absolute path of the module (None if MISSING)
        root: Search root that contributed the module (None if MISSING)
        invoke: Callable set by the catalog; takes the report for this
            invocation as its only argument (None if MISSING)
    """
    name: str
    kind: CheckKind
    location: Optional[str] = None
    root: Optional[str] = None
    invoke: Optional[Callable[[Any], Any]] = field(default=None, compare=False, repr=False)

    @classmethod
    def missing(cls, name: str) -> 'CheckEntry':
        """Create an entry for a name that resolved to nothing."""
        return cls(name=name, kind=CheckKind.MISSING)

    def is_missing(self) -> bool:
        return self.kind == CheckKind.MISSING


# === Execution ===

@dataclass
class RunSummary:
    """Warn/error tally for exactly one check invocation."""
    warn: int = 0
    error: int = 0

    def reset(self) -> None:
        self.warn = 0
        self.error = 0

    def is_clean(self) -> bool:
        return self.warn == 0 and self.error == 0

    def to_dict(self) -> dict:
        return {"warn": self.warn, "error": self.error}


@dataclass
class InvokeResult:
    """
    Outcome of calling a check inside the fault boundary.

    Attributes:
        success: Whether the entry point returned normally
        error: Captured diagnostic (traceback text) if it raised
    """
    success: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls) -> 'InvokeResult':
        return cls(success=True)

    @classmethod
    def fail(cls, error: str) -> 'InvokeResult':
        return cls(success=False, error=error)


@dataclass
class HealthReport:
    """
    The rendered document produced by one run.

    Attributes:
        lines: Ordered report lines (banner, body, blank separator per check)
        summaries: Per-check tallies keyed by canonical name
    """
    lines: List[str] = field(default_factory=list)
    summaries: Dict[str, RunSummary] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def check_count(self) -> int:
        return len(self.summaries)

    @property
    def total_warnings(self) -> int:
        return sum(s.warn for s in self.summaries.values())

    @property
    def total_errors(self) -> int:
        return sum(s.error for s in self.summaries.values())

    def has_errors(self) -> bool:
        """True if any check reported an error, or nothing was found."""
        return self.total_errors > 0 or not self.summaries

    def to_dict(self) -> dict:
        """Serialize for JSON output."""
        return {
            "checks": {name: s.to_dict() for name, s in self.summaries.items()},
            "warnings": self.total_warnings,
            "errors": self.total_errors,
            "lines": list(self.lines),
        }


# Callback signature: (check_name, current, total)
ProgressCallback = Callable[[str, int, int], None]
