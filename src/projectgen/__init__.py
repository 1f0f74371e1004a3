"""Generate new projects from template repositories.

The package creates a hosted repository from a template, clones it, renames
the template's placeholder files and rewrites the placeholder tokens inside
them to the new project's name. The instantiation pipeline can be used on its
own against any checkout, and the whole flow is available via the command
line interface.
"""

from __future__ import annotations

from .config import GeneratorConfig, GeneratorSettings
from .editor import edit_file
from .errors import GenerationError, TokenCountError, TokenNotFoundError
from .generator import ProjectGenerator
from .layouts import TemplateLayout, TemplateVariant, builtin_layout, load_layout
from .pipeline import InstantiationPipeline, PipelineResult, StageResult
from .status import StatusCode
from .substitution import ReplacementPolicy, replace_all, replace_first, replace_last

__all__ = [
    "GenerationError",
    "GeneratorConfig",
    "GeneratorSettings",
    "InstantiationPipeline",
    "PipelineResult",
    "ProjectGenerator",
    "ReplacementPolicy",
    "StageResult",
    "StatusCode",
    "TemplateLayout",
    "TemplateVariant",
    "TokenCountError",
    "TokenNotFoundError",
    "builtin_layout",
    "edit_file",
    "load_layout",
    "replace_all",
    "replace_first",
    "replace_last",
]

__version__ = "0.1.0"
