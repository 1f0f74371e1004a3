"""End-to-end project generation: remote repository, checkout, instantiation, build."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from .commands import CommandRunner, open_command
from .config import GeneratorConfig
from .errors import GenerationError
from .hosting import GitHubCLI
from .pipeline import InstantiationPipeline, PipelineResult
from .status import StatusCode

__all__ = ["ProjectGenerator"]

LOGGER = logging.getLogger(__name__)


class ProjectGenerator:
    """Drive every generation step in order and report one terminal status."""

    def __init__(
        self,
        config: GeneratorConfig,
        *,
        runner: CommandRunner | None = None,
        hosting: GitHubCLI | None = None,
        git_executable: str = "git",
    ) -> None:
        self.config = config
        self.runner = runner or CommandRunner(dry_run=config.dry_run)
        self.hosting = hosting or GitHubCLI(self.runner)
        self.git = git_executable
        self.pipeline_result: PipelineResult | None = None

    def generate(self) -> StatusCode:
        """Generate the configured project, stopping at the first failure."""

        status = self._check_tools()
        if status is not StatusCode.SUCCESS:
            return status

        target = self.config.project_directory
        if os.path.lexists(target):
            LOGGER.error("%s already exists", target)
            return StatusCode.PROJECT_DIRECTORY_EXISTS
        if self.config.dry_run:
            LOGGER.info("dry run, not creating %s", target)
        else:
            try:
                target.mkdir(parents=True)
            except (OSError, ValueError) as exc:
                LOGGER.error("couldn't create %s: %s", target, exc)
                return StatusCode.DIRECTORY_CREATION_FAILED

        try:
            self._populate(target)
        except GenerationError as exc:
            LOGGER.error("%s", exc)
            if self.config.cleanup_on_failure and exc.status is not StatusCode.LAUNCH_FAILED:
                self._discard(target)
            return exc.status

        LOGGER.info("generated %s at %s", self.config.name, target)
        return StatusCode.SUCCESS

    def _check_tools(self) -> StatusCode:
        if not self.runner.probe(self.git):
            return StatusCode.GIT_MISSING
        if not self.runner.probe(self.hosting.executable):
            return StatusCode.GH_MISSING
        return StatusCode.SUCCESS

    def _populate(self, target: Path) -> None:
        config = self.config
        settings = config.settings
        parent = config.directory

        self.hosting.create_repository(
            config.name,
            template=config.template_repository,
            public=config.public,
            cwd=parent,
        )
        self.hosting.wait_until_ready(
            config.name,
            cwd=parent,
            timeout=settings.ready_timeout,
            interval=settings.ready_interval,
            backoff=settings.ready_backoff,
        )
        self.hosting.clone_repository(config.name, target, cwd=parent)

        self.instantiate(target)
        self.commit(target)
        self.generate_build_files(target)
        if config.open_solution:
            self.open_solution(target)

    def instantiate(self, target: Path) -> None:
        """Run the template instantiation pipeline on the checkout at ``target``."""

        pipeline = InstantiationPipeline.from_layout(self.config.template_layout, self.config.name)
        if self.config.dry_run:
            for stage in pipeline.stages:
                LOGGER.info("dry run, skipping stage: %s", stage.name)
            return

        result = pipeline.run(target)
        self.pipeline_result = result
        if result.failure is not None:
            raise GenerationError(
                f"{result.failure.stage}: {result.failure.message}",
                status=result.failure.status,
            )

    def commit(self, target: Path) -> None:
        status = StatusCode.COMMIT_FAILED
        self.runner.run([self.git, "add", "-A"], cwd=target, status=status)
        self.runner.run(
            [self.git, "commit", "-m", self.config.settings.commit_message],
            cwd=target,
            status=status,
        )
        self.runner.run([self.git, "push"], cwd=target, status=status)

    def generate_build_files(self, target: Path) -> None:
        scripts = target / "Scripts"
        script = self.config.settings.generator_script
        command = [script] if os.path.isabs(script) else [str(scripts / script)]
        self.runner.run(command, cwd=scripts, status=StatusCode.GENERATE_FAILED)

    def open_solution(self, target: Path) -> None:
        solution = target / f"{self.config.name}.sln"
        self.runner.launch(open_command(solution), cwd=target, status=StatusCode.LAUNCH_FAILED)

    def _discard(self, target: Path) -> None:
        LOGGER.warning("removing partially generated project at %s", target)
        try:
            shutil.rmtree(target)
        except OSError as exc:
            LOGGER.warning("couldn't remove %s: %s", target, exc)
