"""
Execution of external commands with optional verbose streaming.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Callable, Optional, Union

import click


logger = logging.getLogger(__name__)


class CommandRunner:
    """Run external commands in a working directory.

    In verbose mode the command line is echoed first and the child process
    writes straight to our stdout/stderr. Otherwise stdout and stderr are
    captured together and only shown when the command fails.
    """

    def __init__(self, verbose: bool = False, echo: Optional[Callable[..., None]] = None) -> None:
        self.verbose = verbose
        self._echo = echo or click.echo
        self.last_error: Optional[str] = None

    def run(self, cwd: Union[str, Path], *args: str) -> bool:
        """Run `args` in `cwd`; return True if the command exited with status 0."""
        cmd = [str(a) for a in args]
        cmd_line = shlex.join(cmd)
        self.last_error = None
        logger.debug(f"Running in {cwd}: {cmd_line}")

        if self.verbose:
            self._echo(f"-> Running in {cwd}: {cmd_line}")
            try:
                completed = subprocess.run(cmd, cwd=str(cwd))
            except OSError as e:
                return self._fail(cmd_line, str(e))
            if completed.returncode != 0:
                return self._fail(cmd_line, f"exit status {completed.returncode}")
            return True

        try:
            completed = subprocess.run(
                cmd,
                cwd=str(cwd),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            return self._fail(cmd_line, str(e))

        if completed.returncode != 0:
            if completed.stdout:
                self._echo(completed.stdout, nl=False)
            return self._fail(cmd_line, f"exit status {completed.returncode}")
        return True

    def _fail(self, cmd_line: str, detail: str) -> bool:
        self.last_error = detail
        logger.error(f"Command failed ({detail}): {cmd_line}")
        return False
