"""Deterministic stand-ins for the external tools used by the generator."""

from __future__ import annotations

import subprocess
from collections import deque
from pathlib import Path
from typing import Callable, Deque, Iterable, Mapping, Sequence

from projectgen.errors import CommandError
from projectgen.status import StatusCode

Prefix = tuple[str, ...]
Hook = Callable[[tuple[str, ...], Path], None]


def _matches(command: tuple[str, ...], prefix: Prefix) -> bool:
    return command[: len(prefix)] == prefix


class FakeRunner:
    """Record commands instead of running them.

    ``failing`` lists command prefixes that exit unsuccessfully, ``responses``
    maps prefixes to stdout values returned in order (the last one repeats),
    and ``hooks`` run side effects such as seeding a clone.
    """

    def __init__(
        self,
        *,
        missing: Iterable[str] = (),
        failing: Iterable[Prefix] = (),
        responses: Mapping[Prefix, Sequence[str]] | None = None,
        hooks: Mapping[Prefix, Hook] | None = None,
    ) -> None:
        self.dry_run = False
        self.missing = set(missing)
        self.failing = list(failing)
        self.responses: dict[Prefix, Deque[str]] = {
            prefix: deque(values) for prefix, values in (responses or {}).items()
        }
        self.hooks = dict(hooks or {})
        self.probed: list[str] = []
        self.calls: list[tuple[tuple[str, ...], Path]] = []
        self.launched: list[tuple[tuple[str, ...], Path]] = []

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [command for command, _ in self.calls]

    def probe(self, tool: str) -> bool:
        self.probed.append(tool)
        return tool not in self.missing

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path,
        status: StatusCode,
        capture: bool = False,
    ) -> subprocess.CompletedProcess[str]:
        command = tuple(args)
        self.calls.append((command, Path(cwd)))
        if any(_matches(command, prefix) for prefix in self.failing):
            raise CommandError(command, status, 1)
        for prefix, hook in self.hooks.items():
            if _matches(command, prefix):
                hook(command, Path(cwd))
        return subprocess.CompletedProcess(command, 0, stdout=self._stdout(command), stderr="")

    def launch(self, args: Sequence[str], *, cwd: Path, status: StatusCode) -> None:
        command = tuple(args)
        self.launched.append((command, Path(cwd)))
        if any(_matches(command, prefix) for prefix in self.failing):
            raise CommandError(command, status)

    def _stdout(self, command: tuple[str, ...]) -> str:
        for prefix, values in self.responses.items():
            if _matches(command, prefix) and values:
                return values.popleft() if len(values) > 1 else values[0]
        return ""


class FakeClock:
    """Monotonic clock advanced only by :meth:`sleep`."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
