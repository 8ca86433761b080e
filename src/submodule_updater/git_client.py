"""
Git access for the submodule update tool.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence, Union

from git import Git
from git.exc import GitCommandError, GitCommandNotFound

from .command_runner import CommandRunner
from .models import GitRepositoryError, SubmoduleError


logger = logging.getLogger(__name__)


def parse_submodule_status(output: str) -> List[str]:
    """Extract submodule paths from `git submodule status` output.

    Lines look like ``-<sha> <path> (<describe>)``; the leading marker is
    optional, so the path is taken as the second whitespace-delimited field
    of the trimmed line.
    """
    paths: List[str] = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        fields = line.split()
        if len(fields) >= 2:
            paths.append(fields[1])
    return paths


class VersionControlClient(ABC):
    """Abstract interface for the version-control operations the updater needs."""

    @abstractmethod
    def get_root_dir(self) -> Path:
        """
        Return the top-level directory of the enclosing repository.

        Raises:
            GitRepositoryError: if not inside a repository or git is unavailable
        """
        pass

    @abstractmethod
    def init_submodules(self, root_dir: Path) -> None:
        """
        Clone and initialize all registered submodules recursively.

        Raises:
            SubmoduleError: if initialization fails
        """
        pass

    @abstractmethod
    def list_submodules(self, root_dir: Path) -> List[str]:
        """
        Return the root-relative paths of all registered submodules.

        Raises:
            SubmoduleError: if the status query fails
        """
        pass

    @abstractmethod
    def fetch_all(self, submodule_dir: Path) -> bool:
        """Fetch all remotes and tags into a submodule working copy."""
        pass

    @abstractmethod
    def checkout(self, submodule_dir: Path, ref: str) -> bool:
        """Check out a commit, tag or branch in a submodule working copy."""
        pass

    @abstractmethod
    def update_remote(self, root_dir: Path, paths: Sequence[str]) -> bool:
        """Advance the given submodules to the tip of their tracked remote branch."""
        pass

    @property
    def last_error(self) -> Optional[str]:
        """Detail of the most recent failed operation, if any."""
        return None


class GitClient(VersionControlClient):
    """VersionControlClient backed by the git command line.

    Read-only queries go through GitPython's command wrapper; commands that
    change working copies go through the CommandRunner so they honour the
    verbose setting.
    """

    def __init__(self, runner: CommandRunner, start_path: Optional[Union[str, Path]] = None) -> None:
        self.runner = runner
        self.start_path = Path(start_path or Path.cwd()).resolve()

    @property
    def last_error(self) -> Optional[str]:
        return self.runner.last_error

    def get_root_dir(self) -> Path:
        logger.debug(f"Resolving repository root from: {self.start_path}")
        try:
            output = Git(str(self.start_path)).rev_parse("--show-toplevel")
        except (GitCommandError, GitCommandNotFound) as e:
            logger.error(f"Could not resolve repository root from {self.start_path}: {e}")
            raise GitRepositoryError(str(e)) from e
        root = output.strip()
        if not root:
            raise GitRepositoryError(f"git returned no top-level directory for {self.start_path}")
        logger.info(f"Found Git repository at: {root}")
        return Path(root)

    def init_submodules(self, root_dir: Path) -> None:
        if not self.runner.run(root_dir, "git", "submodule", "update", "--init", "--recursive", "--progress"):
            raise SubmoduleError(self.runner.last_error or "git submodule update --init failed")
        logger.info(f"Initialized submodules in {root_dir}")

    def list_submodules(self, root_dir: Path) -> List[str]:
        try:
            output = Git(str(root_dir)).submodule("status")
        except (GitCommandError, GitCommandNotFound) as e:
            logger.error(f"Error listing submodules in {root_dir}: {e}")
            raise SubmoduleError(str(e)) from e
        paths = parse_submodule_status(output)
        logger.info(f"Discovered {len(paths)} submodules in {root_dir}")
        return paths

    def fetch_all(self, submodule_dir: Path) -> bool:
        return self.runner.run(submodule_dir, "git", "fetch", "--all", "--tags")

    def checkout(self, submodule_dir: Path, ref: str) -> bool:
        return self.runner.run(submodule_dir, "git", "checkout", ref)

    def update_remote(self, root_dir: Path, paths: Sequence[str]) -> bool:
        return self.runner.run(root_dir, "git", "submodule", "update", "--remote", "--", *paths)
