from __future__ import annotations

from pathlib import Path

import pytest

from projectgen.errors import RenameError
from projectgen.paths import rename_entry
from projectgen.status import StatusCode


def test_rename_directory_keeps_contents(tmp_path: Path):
    source = tmp_path / "__PROJECT_NAME__"
    (source / "src").mkdir(parents=True)
    (source / "src" / "main.cpp").write_text("int main() {}\n", encoding="utf-8")

    destination = rename_entry(source, tmp_path / "Calculator")

    assert destination == tmp_path / "Calculator"
    assert not source.exists()
    assert (destination / "src" / "main.cpp").read_text(encoding="utf-8") == "int main() {}\n"


def test_rename_missing_source_fails(tmp_path: Path):
    with pytest.raises(RenameError) as excinfo:
        rename_entry(tmp_path / "OLCTemplate", tmp_path / "Widget")

    assert excinfo.value.status is StatusCode.FILE_RENAME_FAILED


def test_rename_never_overwrites_destination(tmp_path: Path):
    (tmp_path / "OLCTemplate.h").write_text("template", encoding="utf-8")
    (tmp_path / "Widget.h").write_text("existing", encoding="utf-8")

    with pytest.raises(RenameError):
        rename_entry(tmp_path / "OLCTemplate.h", tmp_path / "Widget.h")

    assert (tmp_path / "OLCTemplate.h").read_text(encoding="utf-8") == "template"
    assert (tmp_path / "Widget.h").read_text(encoding="utf-8") == "existing"


def test_rename_must_stay_in_the_same_directory(tmp_path: Path):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "file.txt").write_text("", encoding="utf-8")

    with pytest.raises(RenameError):
        rename_entry(tmp_path / "a" / "file.txt", tmp_path / "file.txt")



def test_name_rejected_by_the_filesystem_is_a_rename_error(tmp_path: Path):
    (tmp_path / "__PROJECT_NAME__").mkdir()

    with pytest.raises(RenameError) as excinfo:
        rename_entry(tmp_path / "__PROJECT_NAME__", tmp_path / "bad\0name")

    assert excinfo.value.status is StatusCode.FILE_RENAME_FAILED
    assert (tmp_path / "__PROJECT_NAME__").is_dir()
