"""Repository hosting operations performed through the GitHub CLI."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .commands import CommandRunner
from .errors import CommandError, RepositoryNotReadyError
from .status import StatusCode

__all__ = ["GitHubCLI"]

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class GitHubCLI:
    """Create, inspect and clone repositories with ``gh``."""

    runner: CommandRunner
    executable: str = "gh"
    sleep: Callable[[float], None] = field(default=time.sleep)
    clock: Callable[[], float] = field(default=time.monotonic)

    def create_repository(self, name: str, *, template: str, public: bool, cwd: Path) -> None:
        """Create the hosted repository ``name`` from ``template`` (``OWNER/REPO``)."""

        visibility = "--public" if public else "--private"
        self.runner.run(
            [self.executable, "repo", "create", name, visibility, "--template", template],
            cwd=cwd,
            status=StatusCode.REPOSITORY_CREATION_FAILED,
        )
        LOGGER.info("created repository %s from %s", name, template)

    def is_ready(self, name: str, *, cwd: Path) -> bool:
        """Return whether ``name`` exists and already has content to clone."""

        if self.runner.dry_run:
            return True
        try:
            completed = self.runner.run(
                [self.executable, "repo", "view", name, "--json", "isEmpty"],
                cwd=cwd,
                status=StatusCode.REPOSITORY_NOT_READY,
                capture=True,
            )
        except CommandError as exc:
            LOGGER.debug("repository %s not visible yet: %s", name, exc)
            return False

        try:
            payload = json.loads(completed.stdout or "{}")
        except json.JSONDecodeError:
            LOGGER.debug("unexpected repo view output: %r", completed.stdout)
            return False
        return payload.get("isEmpty") is False

    def wait_until_ready(
        self,
        name: str,
        *,
        cwd: Path,
        timeout: float,
        interval: float,
        backoff: float = 2.0,
    ) -> None:
        """Poll :meth:`is_ready` with exponential backoff until ``timeout`` expires.

        A freshly created repository can briefly be visible but still empty;
        cloning it then yields an empty checkout.
        """

        deadline = self.clock() + timeout
        delay = interval
        attempts = 0
        while True:
            attempts += 1
            if self.is_ready(name, cwd=cwd):
                LOGGER.info("repository %s ready after %d check(s)", name, attempts)
                return
            remaining = deadline - self.clock()
            if remaining <= 0:
                raise RepositoryNotReadyError(
                    f"repository {name} not ready after {attempts} check(s) in {timeout:g}s"
                )
            self.sleep(min(delay, remaining))
            delay *= backoff

    def clone_repository(self, name: str, destination: Path, *, cwd: Path) -> None:
        self.runner.run(
            [self.executable, "repo", "clone", name, str(destination)],
            cwd=cwd,
            status=StatusCode.CLONE_FAILED,
        )
        LOGGER.info("cloned %s into %s", name, destination)
