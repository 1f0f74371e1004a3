"""Invocation of the external tools the generator delegates to."""

from __future__ import annotations

import logging
import subprocess
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .errors import CommandError
from .status import StatusCode

__all__ = ["CommandRunner", "open_command"]

LOGGER = logging.getLogger(__name__)


def open_command(path: Path, *, platform: str | None = None) -> list[str]:
    """Return the command opening ``path`` with its associated application."""

    platform = platform or sys.platform
    if platform.startswith("win"):
        return ["cmd", "/c", "start", "", str(path)]
    if platform == "darwin":
        return ["open", str(path)]
    return ["xdg-open", str(path)]


@dataclass(slots=True)
class CommandRunner:
    """Run external commands with an explicit working directory.

    Attributes
    ----------
    dry_run:
        When ``True`` commands are only logged and reported as successful.
    children:
        Launched processes that were still running at the last launch.
    """

    dry_run: bool = False
    children: list[subprocess.Popen[bytes]] = field(default_factory=list, repr=False)

    def probe(self, tool: str) -> bool:
        """Return whether ``tool`` is installed and answers ``--version``."""

        args = (tool, "--version")
        LOGGER.debug("probe: %s", " ".join(args))
        if self.dry_run:
            return True
        try:
            completed = subprocess.run(
                args,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError:
            return False
        return completed.returncode == 0

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        status: StatusCode,
        capture: bool = False,
    ) -> subprocess.CompletedProcess[str]:
        """Run ``args`` inside ``cwd`` and wait for it to finish.

        Raises :class:`CommandError` carrying ``status`` when the command cannot
        be started or exits with a nonzero code.
        """

        command = tuple(args)
        LOGGER.debug("command (cwd=%s): %s", cwd, " ".join(command))
        if self.dry_run:
            return subprocess.CompletedProcess(command, 0, stdout="", stderr="")

        try:
            completed = subprocess.run(
                command,
                cwd=cwd,
                capture_output=capture,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise CommandError(command, status) from exc
        if completed.returncode != 0:
            raise CommandError(command, status, completed.returncode)
        return completed

    def launch(self, args: Sequence[str], *, cwd: Path, status: StatusCode) -> subprocess.Popen[bytes] | None:
        """Start ``args`` without waiting for it to exit.

        The process handle is kept in :attr:`children` and returned; ``None``
        in dry run.
        """

        command = tuple(args)
        LOGGER.debug("launch (cwd=%s): %s", cwd, " ".join(command))
        if self.dry_run:
            return None
        try:
            process = subprocess.Popen(
                command,
                cwd=cwd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            raise CommandError(command, status) from exc
        self.children = [child for child in self.children if child.poll() is None]
        self.children.append(process)
        return process
