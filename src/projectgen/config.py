"""Configuration shared by the generator driver and the CLI."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .layouts import TemplateLayout, TemplateVariant, builtin_layout

__all__ = ["GeneratorConfig", "GeneratorSettings", "default_project_directory"]


def default_project_directory() -> Path:
    """Directory new projects are created in when ``--dir`` is not given."""

    if sys.platform.startswith("win"):
        return Path("C:/Workspace/Programming/Dev/C++")
    return Path.home()


def _default_generator_script() -> str:
    if sys.platform.startswith("win"):
        return "GenerateProjects.bat"
    return "GenerateProjects.sh"


class GeneratorSettings(BaseSettings):
    """Environment backed defaults, read from ``PROJECTGEN_*`` variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="PROJECTGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_account: str = Field(default="Shlayne", min_length=1, description="Owner of the template repositories.")
    default_directory: Path = Field(
        default_factory=default_project_directory,
        description="Parent directory of generated projects.",
    )
    commit_message: str = Field(default="Project Generation Commit.", min_length=1)
    ready_timeout: float = Field(default=30.0, ge=0, description="Seconds to wait for the new repository.")
    ready_interval: float = Field(default=1.0, gt=0, description="First delay between readiness checks.")
    ready_backoff: float = Field(default=2.0, ge=1, description="Growth factor of the readiness delay.")
    generator_script: str = Field(
        default_factory=_default_generator_script,
        description="Build-file generator run from the project's Scripts directory.",
    )


@dataclass(slots=True)
class GeneratorConfig:
    """Everything needed to generate one project.

    Attributes
    ----------
    name:
        The project name. It is used verbatim as a directory name and as the
        value substituted for every placeholder.
    directory:
        Parent directory; the project is created at ``directory / name``.
    variant:
        Template repository the project is generated from.
    layout:
        Custom instantiation steps; ``None`` selects the built-in layout of
        ``variant`` (see :attr:`template_layout`).
    public:
        Create a public instead of a private repository.
    dry_run:
        Log external commands instead of running them.
    open_solution:
        Launch the generated solution once everything else succeeded.
    cleanup_on_failure:
        Remove the partially generated project directory when a later stage
        fails. By default the directory is left for inspection.
    """

    name: str
    directory: Path
    variant: TemplateVariant = TemplateVariant.STANDARD
    layout: TemplateLayout | None = None
    public: bool = False
    dry_run: bool = False
    open_solution: bool = True
    cleanup_on_failure: bool = False
    settings: GeneratorSettings = field(default_factory=GeneratorSettings)

    @classmethod
    def create(
        cls,
        name: str,
        *,
        directory: str | Path | None = None,
        settings: GeneratorSettings | None = None,
        **options: object,
    ) -> GeneratorConfig:
        """Build a :class:`GeneratorConfig` for ``name``.

        ``directory`` falls back to :attr:`GeneratorSettings.default_directory`.
        Remaining keyword arguments are passed through to the constructor.
        """

        project_name = name.strip()
        if not project_name:
            raise ValueError("project name must not be empty")

        settings = settings or GeneratorSettings()
        parent = Path(directory) if directory is not None else settings.default_directory
        return cls(
            name=project_name,
            directory=parent.expanduser(),
            settings=settings,
            **options,  # type: ignore[arg-type]
        )

    @property
    def project_directory(self) -> Path:
        return self.directory / self.name

    @property
    def template_layout(self) -> TemplateLayout:
        """The custom :attr:`layout`, or the built-in layout of :attr:`variant`."""

        if self.layout is None:
            return builtin_layout(self.variant)
        return self.layout

    @property
    def template_repository(self) -> str:
        """``OWNER/REPO`` of the template the hosted repository is created from."""

        return f"{self.settings.github_account}/{self.template_layout.repository}"
