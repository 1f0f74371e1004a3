"""Declarative descriptions of the template repositories and their placeholders."""

from __future__ import annotations

from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import LayoutError
from .substitution import ReplacementPolicy, apply_rule

__all__ = [
    "ALTERNATE_LAYOUT",
    "DEFAULT_TEMPLATE_TOKEN",
    "EditStep",
    "FileTarget",
    "LayoutStep",
    "NAME_MARKER",
    "PROJECT_NAME_TOKEN",
    "RenameStep",
    "STANDARD_LAYOUT",
    "TemplateLayout",
    "TemplateVariant",
    "TokenRule",
    "VARIANT_NAME_TOKEN",
    "WORKSPACE_NAME_TOKEN",
    "builtin_layout",
    "load_layout",
]

PROJECT_NAME_TOKEN = "__PROJECT_NAME__"
WORKSPACE_NAME_TOKEN = "__WORKSPACE_NAME__"
VARIANT_NAME_TOKEN = "OLCTemplate"
DEFAULT_TEMPLATE_TOKEN = "ProjectTemplate"

# Expanded to the project name inside layout paths.
NAME_MARKER = "{name}"


class TemplateVariant(str, Enum):
    """Upstream template repositories a project can be generated from."""

    STANDARD = "ProjectTemplate"
    ALTERNATE = "OLCTemplate"

    @property
    def repository(self) -> str:
        return self.value


def expand_name(value: str, name: str) -> str:
    return value.replace(NAME_MARKER, name)


def _relative_path(value: str) -> str:
    path = PurePosixPath(value)
    if not value or path.is_absolute() or ".." in path.parts:
        raise ValueError(f"{value!r} must be a relative path inside the checkout")
    return value


class TokenRule(BaseModel):
    """A placeholder, how it is replaced and how often it must occur."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    token: str = Field(..., min_length=1, description="Literal placeholder text.")
    policy: ReplacementPolicy = Field(default=ReplacementPolicy.ALL, description="Occurrences that are replaced.")
    expected: Optional[int] = Field(None, ge=1, description="Exact occurrence count checked before replacing.")

    def apply(self, text: str, replacement: str) -> str:
        return apply_rule(text, self.token, replacement, policy=self.policy, expected=self.expected)


class FileTarget(BaseModel):
    """A file inside the checkout and the rules applied to its contents."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str = Field(..., description="Checkout relative path, may contain {name}.")
    rules: List[TokenRule] = Field(..., min_length=1, description="Rules applied in order.")

    @field_validator("path")
    @classmethod
    def check_relative(cls, value: str) -> str:
        return _relative_path(value)

    def resolve(self, name: str) -> FileTarget:
        return self.model_copy(update={"path": expand_name(self.path, name)})

    def transform(self, text: str, replacement: str) -> str:
        for rule in self.rules:
            text = rule.apply(text, replacement)
        return text


class RenameStep(BaseModel):
    """Rename a placeholder-named file or directory."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["rename"] = "rename"
    source: str
    destination: str

    @field_validator("source", "destination")
    @classmethod
    def check_relative(cls, value: str) -> str:
        return _relative_path(value)


class EditStep(BaseModel):
    """Rewrite placeholders inside one file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["edit"] = "edit"
    target: FileTarget


LayoutStep = Annotated[Union[RenameStep, EditStep], Field(discriminator="kind")]


class TemplateLayout(BaseModel):
    """Ordered instantiation steps for one template repository."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    repository: str = Field(..., min_length=1, description="Template repository name on the hosting service.")
    steps: List[LayoutStep] = Field(..., min_length=1, description="Steps executed in order.")


def _rename(source: str, destination: str) -> RenameStep:
    return RenameStep(source=source, destination=destination)


def _edit(path: str, *rules: TokenRule) -> EditStep:
    return EditStep(target=FileTarget(path=path, rules=list(rules)))


STANDARD_LAYOUT = TemplateLayout(
    repository=TemplateVariant.STANDARD.repository,
    steps=[
        _rename(PROJECT_NAME_TOKEN, "{name}"),
        _rename(f"{{name}}/Build{PROJECT_NAME_TOKEN}.lua", "{name}/Build{name}.lua"),
        _edit(
            "{name}/Build{name}.lua",
            TokenRule(token=PROJECT_NAME_TOKEN, policy=ReplacementPolicy.FIRST),
        ),
        _edit(
            "BuildAll.lua",
            TokenRule(token=WORKSPACE_NAME_TOKEN, policy=ReplacementPolicy.FIRST, expected=1),
            TokenRule(token=PROJECT_NAME_TOKEN, policy=ReplacementPolicy.FIRST_AND_LAST, expected=2),
        ),
        _edit(
            "README.md",
            TokenRule(token=DEFAULT_TEMPLATE_TOKEN, policy=ReplacementPolicy.FIRST, expected=1),
        ),
    ],
)

_ALL_VARIANT_TOKENS = TokenRule(token=VARIANT_NAME_TOKEN, policy=ReplacementPolicy.ALL)

ALTERNATE_LAYOUT = TemplateLayout(
    repository=TemplateVariant.ALTERNATE.repository,
    steps=[
        _rename(VARIANT_NAME_TOKEN, "{name}"),
        _rename(f"{{name}}/Build{PROJECT_NAME_TOKEN}.lua", "{name}/Build{name}.lua"),
        _edit(
            "{name}/Build{name}.lua",
            TokenRule(token=VARIANT_NAME_TOKEN, policy=ReplacementPolicy.FIRST),
        ),
        _edit("BuildAll.lua", _ALL_VARIANT_TOKENS),
        _edit("BuildDependencies.lua", _ALL_VARIANT_TOKENS),
        _edit("README.md", _ALL_VARIANT_TOKENS),
        _edit(f"{{name}}/src/{VARIANT_NAME_TOKEN}.h", _ALL_VARIANT_TOKENS),
        _edit(f"{{name}}/src/{VARIANT_NAME_TOKEN}.cpp", _ALL_VARIANT_TOKENS),
        _edit("{name}/src/main.cpp", _ALL_VARIANT_TOKENS),
        _rename(f"{{name}}/src/{VARIANT_NAME_TOKEN}.h", "{name}/src/{name}.h"),
        _rename(f"{{name}}/src/{VARIANT_NAME_TOKEN}.cpp", "{name}/src/{name}.cpp"),
    ],
)

_BUILTIN_LAYOUTS = {
    TemplateVariant.STANDARD: STANDARD_LAYOUT,
    TemplateVariant.ALTERNATE: ALTERNATE_LAYOUT,
}


def builtin_layout(variant: TemplateVariant) -> TemplateLayout:
    """Return the layout shipped for ``variant``."""

    return _BUILTIN_LAYOUTS[variant]


def load_layout(path: str | Path) -> TemplateLayout:
    """Load a :class:`TemplateLayout` from a JSON document."""

    path = Path(path)
    try:
        payload = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LayoutError(f"couldn't read layout {path}: {exc.strerror or exc}") from exc
    try:
        return TemplateLayout.model_validate_json(payload)
    except ValidationError as exc:
        raise LayoutError(f"invalid layout {path}: {exc.error_count()} error(s)\n{exc}") from exc
