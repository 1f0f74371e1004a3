from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for path in (SRC, ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from projectgen.config import GeneratorSettings  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    """Keep ``PROJECTGEN_*`` variables and stray ``.env`` files out of tests."""

    for key in list(os.environ):
        if key.startswith("PROJECTGEN_"):
            monkeypatch.delenv(key)
    workdir = tmp_path_factory.mktemp("cwd")
    monkeypatch.chdir(workdir)


@pytest.fixture()
def settings(tmp_path: Path) -> GeneratorSettings:
    return GeneratorSettings(
        github_account="octocat",
        default_directory=tmp_path / "projects",
        ready_timeout=5.0,
        ready_interval=1.0,
        generator_script="GenerateProjects.bat",
    )
