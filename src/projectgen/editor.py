"""Read-modify-write editing of single template files."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable

from .errors import FileReadError, FileWriteError

__all__ = ["edit_file", "read_text", "write_text"]

LOGGER = logging.getLogger(__name__)

# surrogateescape lets undecodable bytes survive the round trip unchanged.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def read_text(path: Path) -> str:
    """Return the contents of ``path`` without newline translation."""

    try:
        data = path.read_bytes()
    except OSError as exc:
        raise FileReadError(f"couldn't read {path}: {exc.strerror or exc}") from exc
    return data.decode(_ENCODING, _ERRORS)


def write_text(path: Path, text: str) -> None:
    """Replace the contents of ``path`` with ``text`` in binary mode.

    The data is written to a sibling temporary file that is then renamed over
    ``path``; a failed write leaves the original untouched.
    """

    if not os.access(path, os.W_OK):
        raise FileWriteError(f"couldn't write {path}: not writable")

    data = text.encode(_ENCODING, _ERRORS)
    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(data)
        shutil.copymode(path, temp_name)
        os.replace(temp_name, path)
    except OSError as exc:
        if temp_name is not None and os.path.exists(temp_name):
            os.unlink(temp_name)
        raise FileWriteError(f"couldn't write {path}: {exc.strerror or exc}") from exc


def edit_file(path: str | Path, transform: Callable[[str], str]) -> bool:
    """Apply ``transform`` to the contents of ``path`` and write them back.

    Exceptions raised by ``transform`` propagate before anything is written.
    Returns ``True`` when the file changed on disk.
    """

    path = Path(path)
    original = read_text(path)
    updated = transform(original)
    if updated == original:
        LOGGER.debug("edit %s: no changes", path)
        return False

    write_text(path, updated)
    LOGGER.debug("edit %s: %d -> %d characters", path, len(original), len(updated))
    return True
