from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from projectgen.errors import LayoutError
from projectgen.layouts import (
    ALTERNATE_LAYOUT,
    STANDARD_LAYOUT,
    EditStep,
    FileTarget,
    RenameStep,
    TemplateLayout,
    TemplateVariant,
    TokenRule,
    builtin_layout,
    load_layout,
)
from projectgen.status import StatusCode
from projectgen.substitution import ReplacementPolicy


def test_builtin_layouts_match_variants():
    assert builtin_layout(TemplateVariant.STANDARD) is STANDARD_LAYOUT
    assert builtin_layout(TemplateVariant.ALTERNATE) is ALTERNATE_LAYOUT
    assert STANDARD_LAYOUT.repository == "ProjectTemplate"
    assert ALTERNATE_LAYOUT.repository == "OLCTemplate"


def test_standard_layout_renames_before_editing_renamed_paths():
    kinds = [step.kind for step in STANDARD_LAYOUT.steps]
    assert kinds[:2] == ["rename", "rename"]
    assert set(kinds[2:]) == {"edit"}


def test_standard_layout_checks_outer_build_script_counts():
    outer = next(
        step.target
        for step in STANDARD_LAYOUT.steps
        if isinstance(step, EditStep) and step.target.path == "BuildAll.lua"
    )
    assert [(rule.token, rule.policy, rule.expected) for rule in outer.rules] == [
        ("__WORKSPACE_NAME__", ReplacementPolicy.FIRST, 1),
        ("__PROJECT_NAME__", ReplacementPolicy.FIRST_AND_LAST, 2),
    ]


def test_alternate_layout_renames_sources_last():
    tail = ALTERNATE_LAYOUT.steps[-2:]
    assert all(isinstance(step, RenameStep) for step in tail)
    assert [step.destination for step in tail] == ["{name}/src/{name}.h", "{name}/src/{name}.cpp"]


def test_file_target_resolve_expands_name():
    target = FileTarget(path="{name}/Build{name}.lua", rules=[TokenRule(token="X")])
    assert target.resolve("Calculator").path == "Calculator/BuildCalculator.lua"
    assert target.path == "{name}/Build{name}.lua"


def test_file_target_applies_rules_in_order():
    target = FileTarget(
        path="BuildAll.lua",
        rules=[
            TokenRule(token="__WORKSPACE_NAME__", policy=ReplacementPolicy.FIRST, expected=1),
            TokenRule(token="__PROJECT_NAME__", policy=ReplacementPolicy.ALL),
        ],
    )
    text = 'workspace "__WORKSPACE_NAME__"\nstartproject "__PROJECT_NAME__"\n'
    assert target.transform(text, "Demo") == 'workspace "Demo"\nstartproject "Demo"\n'


@pytest.mark.parametrize("path", ["/etc/passwd", "../outside.txt", "a/../../b", ""])
def test_paths_must_stay_inside_checkout(path: str):
    with pytest.raises(ValidationError):
        FileTarget(path=path, rules=[TokenRule(token="X")])
    with pytest.raises(ValidationError):
        RenameStep(source=path, destination="x")


def test_token_rule_rejects_non_positive_expected_count():
    with pytest.raises(ValidationError):
        TokenRule(token="X", expected=0)


def test_layout_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        TemplateLayout.model_validate({"repository": "T", "steps": [], "extra": True})


def test_load_layout_from_json(tmp_path: Path):
    document = {
        "repository": "MyTemplate",
        "steps": [
            {"kind": "rename", "source": "MyTemplate", "destination": "{name}"},
            {
                "kind": "edit",
                "target": {
                    "path": "README.md",
                    "rules": [{"token": "MyTemplate", "policy": "first", "expected": 1}],
                },
            },
        ],
    }
    path = tmp_path / "layout.json"
    path.write_text(json.dumps(document), encoding="utf-8")

    layout = load_layout(path)

    assert layout.repository == "MyTemplate"
    assert isinstance(layout.steps[0], RenameStep)
    assert isinstance(layout.steps[1], EditStep)
    assert layout.steps[1].target.rules[0].policy is ReplacementPolicy.FIRST


def test_load_layout_rejects_unknown_step_kind(tmp_path: Path):
    path = tmp_path / "layout.json"
    path.write_text(
        json.dumps({"repository": "T", "steps": [{"kind": "delete", "path": "x"}]}),
        encoding="utf-8",
    )

    with pytest.raises(LayoutError) as excinfo:
        load_layout(path)

    assert excinfo.value.status is StatusCode.LAYOUT_INVALID


def test_load_layout_reports_missing_file(tmp_path: Path):
    with pytest.raises(LayoutError):
        load_layout(tmp_path / "missing.json")


def test_alternate_layout_renames_the_shared_inner_build_script():
    sources = [step.source for step in ALTERNATE_LAYOUT.steps if isinstance(step, RenameStep)]
    assert sources == [
        "OLCTemplate",
        "{name}/Build__PROJECT_NAME__.lua",
        "{name}/src/OLCTemplate.h",
        "{name}/src/OLCTemplate.cpp",
    ]
