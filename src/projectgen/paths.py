"""Renaming of placeholder-named entries inside a template checkout."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .errors import RenameError

__all__ = ["rename_entry"]

LOGGER = logging.getLogger(__name__)


def rename_entry(source: str | Path, destination: str | Path) -> Path:
    """Rename the file or directory ``source`` to ``destination``.

    Both paths must share a parent directory. An existing ``destination`` is
    never overwritten.
    """

    source = Path(source)
    destination = Path(destination)
    if source.parent != destination.parent:
        raise RenameError(f"{source} and {destination} must share a parent directory")
    if not os.path.lexists(source):
        raise RenameError(f"couldn't rename {source}: no such file or directory")
    if os.path.lexists(destination):
        raise RenameError(f"couldn't rename {source}: {destination} already exists")

    try:
        source.rename(destination)
    except (OSError, ValueError) as exc:
        raise RenameError(f"couldn't rename {source}: {getattr(exc, 'strerror', None) or exc}") from exc

    LOGGER.debug("renamed %s -> %s", source, destination.name)
    return destination
