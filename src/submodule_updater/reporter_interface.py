"""
UI-agnostic progress reporting for submodule updates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from .models import SubmoduleResult


class UpdateReporter(ABC):
    """Abstract interface for reporting update progress to the user."""

    @abstractmethod
    def submodule_started(self, path: str, ref: str) -> None:
        """
        Report that a submodule with an explicit ref is about to be processed.

        Args:
            path: Root-relative submodule path
            ref: Requested commit, tag or branch
        """
        pass

    @abstractmethod
    def checkout_started(self, path: str, ref: str) -> None:
        """Report that the requested ref is about to be checked out."""
        pass

    @abstractmethod
    def submodule_finished(self, path: str) -> None:
        """Report that processing of an explicit-ref submodule has ended."""
        pass

    @abstractmethod
    def batch_started(self, paths: Sequence[str]) -> None:
        """Report that the remaining submodules are being moved to their latest commit."""
        pass

    @abstractmethod
    def batch_finished(self, paths: Sequence[str]) -> None:
        """Report that the latest-commit batch has ended."""
        pass

    @abstractmethod
    def failure(self, result: SubmoduleResult) -> None:
        """
        Report a recoverable per-submodule or batch failure.

        Args:
            result: The failed result, carrying path, ref, stage and message
        """
        pass

    @abstractmethod
    def unknown_paths(self, paths: Sequence[str]) -> None:
        """Report requested paths that are not registered submodules."""
        pass


class NoOpReporter(UpdateReporter):
    """Reporter that discards all progress events."""

    def submodule_started(self, path: str, ref: str) -> None:
        pass

    def checkout_started(self, path: str, ref: str) -> None:
        pass

    def submodule_finished(self, path: str) -> None:
        pass

    def batch_started(self, paths: Sequence[str]) -> None:
        pass

    def batch_finished(self, paths: Sequence[str]) -> None:
        pass

    def failure(self, result: SubmoduleResult) -> None:
        pass

    def unknown_paths(self, paths: Sequence[str]) -> None:
        pass
