"""
CLI-specific implementation of the reporter interface.
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from .models import SubmoduleResult
from .reporter_interface import UpdateReporter


class CliReporter(UpdateReporter):
    """CLI implementation of the reporter interface using rich."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def submodule_started(self, path: str, ref: str) -> None:
        self.console.print(f"--- Processing submodule: {escape(path)} -> {escape(ref)} ---", style="bold")

    def checkout_started(self, path: str, ref: str) -> None:
        self.console.print(f"Updating {escape(path)} to specified ref: {escape(ref)}")

    def submodule_finished(self, path: str) -> None:
        self.console.print(f"--- Finished submodule: {escape(path)} ---\n")

    def batch_started(self, paths: Sequence[str]) -> None:
        self.console.print("--- Updating remaining submodules to latest ---", style="bold")

    def batch_finished(self, paths: Sequence[str]) -> None:
        self.console.print("--- Finished updating remaining submodules ---")

    def failure(self, result: SubmoduleResult) -> None:
        self.console.print(f"❌ {escape(result.message)}", style="red")

    def unknown_paths(self, paths: Sequence[str]) -> None:
        for path in paths:
            self.console.print(
                f"⚠️  Warning: {escape(path)} is not a registered submodule; ignoring its ref",
                style="yellow",
            )
