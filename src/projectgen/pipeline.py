"""Template instantiation: the ordered rename and rewrite stages run on a checkout."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable

from .editor import edit_file
from .errors import GenerationError
from .layouts import EditStep, FileTarget, RenameStep, TemplateLayout, expand_name
from .paths import rename_entry
from .status import StatusCode

__all__ = [
    "EditStage",
    "InstantiationPipeline",
    "PipelineResult",
    "RenameStage",
    "Stage",
    "StageResult",
]

LOGGER = logging.getLogger(__name__)


def _resolve(root: Path, relative: str) -> Path:
    return root.joinpath(*PurePosixPath(relative).parts)


@runtime_checkable
class Stage(Protocol):
    """A single, independently failing step of the pipeline."""

    @property
    def name(self) -> str:
        """Human readable label used in logs and results."""

    def run(self, root: Path) -> None:
        """Apply the stage to the checkout at ``root``."""


@dataclass(frozen=True, slots=True)
class RenameStage:
    """Rename a checkout relative entry to its final name."""

    source: str
    destination: str

    @property
    def name(self) -> str:
        return f"rename {self.source} -> {self.destination}"

    def run(self, root: Path) -> None:
        rename_entry(_resolve(root, self.source), _resolve(root, self.destination))


@dataclass(frozen=True, slots=True)
class EditStage:
    """Rewrite the placeholders of one file."""

    target: FileTarget
    replacement: str

    @property
    def name(self) -> str:
        return f"edit {self.target.path}"

    def run(self, root: Path) -> None:
        edit_file(
            _resolve(root, self.target.path),
            lambda text: self.target.transform(text, self.replacement),
        )


@dataclass(frozen=True, slots=True)
class StageResult:
    """Outcome of one stage."""

    stage: str
    status: StatusCode = StatusCode.SUCCESS
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is StatusCode.SUCCESS


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Outcome of a pipeline run: the completed stages and the first failure, if any."""

    completed: tuple[str, ...] = ()
    failure: StageResult | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def status(self) -> StatusCode:
        return StatusCode.SUCCESS if self.failure is None else self.failure.status


@dataclass(slots=True)
class InstantiationPipeline:
    """Run stages in order, stopping at the first failure.

    Earlier stages are not rolled back when a later one fails; the checkout is
    left partially instantiated and should be discarded by the caller.
    """

    stages: list[Stage] = field(default_factory=list)

    @classmethod
    def from_layout(cls, layout: TemplateLayout, project_name: str) -> InstantiationPipeline:
        """Build the stages of ``layout`` for a project called ``project_name``."""

        stages: list[Stage] = []
        for step in layout.steps:
            if isinstance(step, RenameStep):
                stages.append(
                    RenameStage(
                        source=expand_name(step.source, project_name),
                        destination=expand_name(step.destination, project_name),
                    )
                )
            elif isinstance(step, EditStep):
                stages.append(EditStage(target=step.target.resolve(project_name), replacement=project_name))
        return cls(stages)

    def run(self, root: str | Path) -> PipelineResult:
        """Apply every stage to the checkout at ``root``."""

        root = Path(root)
        completed: list[str] = []
        for stage in self.stages:
            result = self.run_stage(stage, root)
            if not result.ok:
                LOGGER.error("stage %r failed: %s", result.stage, result.message)
                return PipelineResult(completed=tuple(completed), failure=result)
            completed.append(stage.name)

        LOGGER.info("instantiated %s in %d stage(s)", root, len(completed))
        return PipelineResult(completed=tuple(completed))

    @staticmethod
    def run_stage(stage: Stage, root: Path) -> StageResult:
        LOGGER.info("stage: %s", stage.name)
        try:
            stage.run(root)
        except GenerationError as exc:
            return StageResult(stage=stage.name, status=exc.status, message=str(exc))
        return StageResult(stage=stage.name)
