"""
Git Submodule Updater - Update every submodule to its latest commit or to a pinned ref.

This package moves the submodules of a repository to the tip of their tracked
branch, or checks out a specific commit, tag or branch for selected ones.
"""

import os

# Report a missing git executable at call time instead of failing on import
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

__version__ = "0.1.0"

from .updater import SubmoduleUpdater
from .models import UpdatePlan, SubmoduleResult, UpdateSummary, UpdaterError
from .git_client import VersionControlClient, GitClient
from .command_runner import CommandRunner
from .ref_parser import parse_ref_args

__all__ = [
    "SubmoduleUpdater",
    "UpdatePlan",
    "SubmoduleResult",
    "UpdateSummary",
    "UpdaterError",
    "VersionControlClient",
    "GitClient",
    "CommandRunner",
    "parse_ref_args",
]
