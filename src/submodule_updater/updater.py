"""
Submodule update orchestration: partition submodules and dispatch updates.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .git_client import VersionControlClient
from .models import (
    STAGE_CHECKOUT,
    STAGE_FETCH,
    STAGE_UPDATE_REMOTE,
    SubmoduleResult,
    UpdatePlan,
    UpdateSummary,
)
from .reporter_interface import NoOpReporter, UpdateReporter


logger = logging.getLogger(__name__)


class SubmoduleUpdater:
    """Updates the submodules of one repository to requested refs or to their latest commit."""

    def __init__(self, client: VersionControlClient, reporter: Optional[UpdateReporter] = None) -> None:
        self.client = client
        self.reporter = reporter or NoOpReporter()

    def resolve_root(self) -> Path:
        """Return the repository root. Raises GitRepositoryError."""
        return self.client.get_root_dir()

    def initialize(self, root_dir: Path) -> None:
        """Clone and initialize missing submodules. Raises SubmoduleError."""
        logger.info(f"Initializing submodules in {root_dir}")
        self.client.init_submodules(root_dir)

    def discover(self, root_dir: Path) -> List[str]:
        """Return registered submodule paths. Raises SubmoduleError."""
        return self.client.list_submodules(root_dir)

    def plan(self, refs: Dict[str, str], submodules: Sequence[str]) -> UpdatePlan:
        """
        Split submodules into explicit-ref and track-latest groups.

        Explicit entries follow the order of `refs`; the latest batch follows
        the order of `submodules`.
        """
        registered = set(submodules)
        plan = UpdatePlan()
        for path, ref in refs.items():
            if path in registered:
                plan.explicit.append((path, ref))
            else:
                plan.unknown.append(path)
        plan.track_latest = [p for p in submodules if p not in refs]

        if plan.unknown:
            logger.warning(f"Requested refs for unregistered submodules ignored: {plan.unknown}")
        logger.info(
            f"Planned {len(plan.explicit)} explicit-ref and {len(plan.track_latest)} latest updates"
        )
        return plan

    def apply(self, root_dir: Path, plan: UpdatePlan) -> UpdateSummary:
        """Execute a plan. Failures are recorded in the summary, never raised."""
        summary = UpdateSummary(plan=plan)

        if plan.unknown:
            self.reporter.unknown_paths(plan.unknown)

        for path, ref in plan.explicit:
            summary.results.append(self._update_to_ref(root_dir, path, ref))

        if plan.track_latest:
            summary.results.extend(self._update_to_latest(root_dir, plan.track_latest))

        logger.info(
            f"Update finished: {len(summary.succeeded)} succeeded, {len(summary.failed)} failed"
        )
        return summary

    def _update_to_ref(self, root_dir: Path, path: str, ref: str) -> SubmoduleResult:
        self.reporter.submodule_started(path, ref)
        submodule_dir = root_dir / path

        if not self.client.fetch_all(submodule_dir):
            result = SubmoduleResult(
                path=path,
                ref=ref,
                success=False,
                stage=STAGE_FETCH,
                message=f"Error fetching in {path}: {self.client.last_error}",
            )
            logger.error(result.message)
            self.reporter.failure(result)
            return result

        self.reporter.checkout_started(path, ref)
        if self.client.checkout(submodule_dir, ref):
            result = SubmoduleResult(path=path, ref=ref)
            logger.info(f"Checked out {ref} in {path}")
        else:
            result = SubmoduleResult(
                path=path,
                ref=ref,
                success=False,
                stage=STAGE_CHECKOUT,
                message=f"Error checking out ref '{ref}' in {path}: {self.client.last_error}",
            )
            logger.error(result.message)
            self.reporter.failure(result)

        self.reporter.submodule_finished(path)
        return result

    def _update_to_latest(self, root_dir: Path, paths: List[str]) -> List[SubmoduleResult]:
        self.reporter.batch_started(paths)

        if self.client.update_remote(root_dir, paths):
            results = [SubmoduleResult(path=p) for p in paths]
            logger.info(f"Updated {len(paths)} submodules to latest")
        else:
            message = f"Error updating submodules to latest: {self.client.last_error}"
            logger.error(message)
            results = [
                SubmoduleResult(path=p, success=False, stage=STAGE_UPDATE_REMOTE, message=message)
                for p in paths
            ]
            # One report for the whole batch
            self.reporter.failure(results[0])

        self.reporter.batch_finished(paths)
        return results
