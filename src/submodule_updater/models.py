"""
Data models for the submodule update tool.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


STAGE_FETCH = "fetch"
STAGE_CHECKOUT = "checkout"
STAGE_UPDATE_REMOTE = "update-remote"


@dataclass
class UpdatePlan:
    """Partition of the registered submodules into the two update strategies."""

    # (path, ref) pairs in the order the refs were requested
    explicit: List[Tuple[str, str]] = field(default_factory=list)
    track_latest: List[str] = field(default_factory=list)
    # Requested paths that are not registered submodules
    unknown: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.explicit and not self.track_latest


@dataclass
class SubmoduleResult:
    """Outcome of updating a single submodule."""

    path: str
    ref: Optional[str] = None
    success: bool = True
    stage: Optional[str] = None
    message: str = ""

    @property
    def target(self) -> str:
        """Human readable update target."""
        return self.ref if self.ref is not None else "latest"


@dataclass
class UpdateSummary:
    """Results of one update run."""

    plan: UpdatePlan
    results: List[SubmoduleResult] = field(default_factory=list)

    @property
    def succeeded(self) -> List[SubmoduleResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> List[SubmoduleResult]:
        return [r for r in self.results if not r.success]

    @property
    def ok(self) -> bool:
        return not self.failed


class UpdaterError(Exception):
    """Base exception for submodule update operations."""

    pass


class GitRepositoryError(UpdaterError):
    """Exception raised when the enclosing repository cannot be resolved."""

    pass


class SubmoduleError(UpdaterError):
    """Exception raised for submodule initialization or enumeration errors."""

    pass
