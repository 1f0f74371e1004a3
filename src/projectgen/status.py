"""Process status codes reported by the project generator."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["StatusCode"]


class StatusCode(IntEnum):
    """Terminal status of a generation run, doubling as the process exit code."""

    SUCCESS = 0
    HELP_SHOWN = 1

    GIT_MISSING = 10
    GH_MISSING = 11
    DIRECTORY_ARG_MISSING = 12
    PROJECT_DIRECTORY_EXISTS = 13
    DIRECTORY_CREATION_FAILED = 14
    REPOSITORY_CREATION_FAILED = 15
    REPOSITORY_NOT_READY = 16
    CLONE_FAILED = 17
    FILE_RENAME_FAILED = 18
    FILE_READ_FAILED = 19
    FILE_WRITE_FAILED = 20
    TOKEN_NOT_FOUND = 21
    TOKEN_COUNT_MISMATCH = 22
    LAYOUT_INVALID = 23
    COMMIT_FAILED = 24
    GENERATE_FAILED = 25
    LAUNCH_FAILED = 26

    @property
    def is_error(self) -> bool:
        return self not in (StatusCode.SUCCESS, StatusCode.HELP_SHOWN)

    @property
    def message(self) -> str:
        """Fixed, human readable description printed for this status."""

        return _MESSAGES[self]


_MESSAGES: dict[StatusCode, str] = {
    StatusCode.SUCCESS: "Project generated.",
    StatusCode.HELP_SHOWN: "Usage shown.",
    StatusCode.GIT_MISSING: "Must have git installed. Get it here: https://git-scm.com/downloads/",
    StatusCode.GH_MISSING: "Must have GitHub CLI installed. Get it here: https://cli.github.com/",
    StatusCode.DIRECTORY_ARG_MISSING: "Missing argument for --dir.",
    StatusCode.PROJECT_DIRECTORY_EXISTS: "A file already exists at the project directory.",
    StatusCode.DIRECTORY_CREATION_FAILED: "Couldn't create project directory.",
    StatusCode.REPOSITORY_CREATION_FAILED: "Couldn't create repository.",
    StatusCode.REPOSITORY_NOT_READY: "Repository wasn't ready to clone in time.",
    StatusCode.CLONE_FAILED: "Couldn't clone repository.",
    StatusCode.FILE_RENAME_FAILED: "Couldn't rename file.",
    StatusCode.FILE_READ_FAILED: "Couldn't read file.",
    StatusCode.FILE_WRITE_FAILED: "Couldn't write file.",
    StatusCode.TOKEN_NOT_FOUND: "Couldn't find an expected placeholder in a template file.",
    StatusCode.TOKEN_COUNT_MISMATCH: "A template file doesn't contain the expected number of placeholders.",
    StatusCode.LAYOUT_INVALID: "Couldn't load the template layout.",
    StatusCode.COMMIT_FAILED: "Couldn't commit generated changes to the repository.",
    StatusCode.GENERATE_FAILED: "Couldn't generate projects.",
    StatusCode.LAUNCH_FAILED: "Couldn't open Visual Studio solution.",
}
