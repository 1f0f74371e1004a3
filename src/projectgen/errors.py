"""Exception types raised by the generator stages."""

from __future__ import annotations

from .status import StatusCode

__all__ = [
    "CommandError",
    "FileReadError",
    "FileWriteError",
    "GenerationError",
    "LayoutError",
    "RenameError",
    "RepositoryNotReadyError",
    "TokenCountError",
    "TokenNotFoundError",
]


class GenerationError(RuntimeError):
    """Base class for failures that map onto a :class:`StatusCode`."""

    status: StatusCode = StatusCode.GENERATE_FAILED

    def __init__(self, message: str, *, status: StatusCode | None = None) -> None:
        super().__init__(message)
        if status is not None:
            self.status = status


class TokenNotFoundError(GenerationError):
    """Raised when a placeholder expected in a buffer is absent."""

    status = StatusCode.TOKEN_NOT_FOUND

    def __init__(self, token: str) -> None:
        super().__init__(f"placeholder {token!r} not found")
        self.token = token


class TokenCountError(GenerationError):
    """Raised when a placeholder occurs a different number of times than expected."""

    status = StatusCode.TOKEN_COUNT_MISMATCH

    def __init__(self, token: str, expected: int, actual: int) -> None:
        super().__init__(f"expected {expected} occurrence(s) of {token!r}, found {actual}")
        self.token = token
        self.expected = expected
        self.actual = actual


class FileReadError(GenerationError):
    status = StatusCode.FILE_READ_FAILED


class FileWriteError(GenerationError):
    status = StatusCode.FILE_WRITE_FAILED


class RenameError(GenerationError):
    status = StatusCode.FILE_RENAME_FAILED


class LayoutError(GenerationError):
    status = StatusCode.LAYOUT_INVALID


class RepositoryNotReadyError(GenerationError):
    status = StatusCode.REPOSITORY_NOT_READY


class CommandError(GenerationError):
    """Raised when an external command exits unsuccessfully or cannot start."""

    def __init__(self, command: tuple[str, ...], status: StatusCode, returncode: int | None = None) -> None:
        detail = "could not be started" if returncode is None else f"exited with {returncode}"
        super().__init__(f"command {' '.join(command)!r} {detail}", status=status)
        self.command = command
        self.returncode = returncode
