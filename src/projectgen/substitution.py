"""Literal placeholder substitution over in-memory file contents."""

from __future__ import annotations

from enum import Enum

from .errors import TokenCountError, TokenNotFoundError

__all__ = [
    "ReplacementPolicy",
    "apply_rule",
    "count_occurrences",
    "replace_all",
    "replace_first",
    "replace_last",
]


class ReplacementPolicy(str, Enum):
    """Which occurrences of a placeholder are replaced."""

    FIRST = "first"
    LAST = "last"
    FIRST_AND_LAST = "first_and_last"
    ALL = "all"


def _check_token(token: str) -> None:
    if not token:
        raise ValueError("token must not be empty")


def count_occurrences(text: str, token: str) -> int:
    """Return the number of non-overlapping occurrences of ``token``."""

    _check_token(token)
    return text.count(token)


def _splice(text: str, index: int, token: str, replacement: str) -> str:
    return text[:index] + replacement + text[index + len(token):]


def replace_first(text: str, token: str, replacement: str) -> str:
    """Replace the first occurrence of ``token`` in ``text``.

    Raises :class:`TokenNotFoundError` when ``token`` does not occur.
    """

    _check_token(token)
    index = text.find(token)
    if index < 0:
        raise TokenNotFoundError(token)
    return _splice(text, index, token, replacement)


def replace_last(text: str, token: str, replacement: str) -> str:
    """Replace the last occurrence of ``token`` in ``text``."""

    _check_token(token)
    index = text.rfind(token)
    if index < 0:
        raise TokenNotFoundError(token)
    return _splice(text, index, token, replacement)


def replace_all(text: str, token: str, replacement: str) -> str:
    """Replace every occurrence of ``token`` from left to right.

    The search resumes after the inserted replacement, so a replacement that
    itself contains ``token`` is never matched again. No occurrences is not an
    error.
    """

    _check_token(token)
    pieces: list[str] = []
    cursor = 0
    while True:
        index = text.find(token, cursor)
        if index < 0:
            break
        pieces.append(text[cursor:index])
        pieces.append(replacement)
        cursor = index + len(token)
    pieces.append(text[cursor:])
    return "".join(pieces)


def apply_rule(
    text: str,
    token: str,
    replacement: str,
    *,
    policy: ReplacementPolicy,
    expected: int | None = None,
) -> str:
    """Check the occurrence count of ``token`` and substitute it per ``policy``.

    Parameters
    ----------
    text:
        The buffer to rewrite.
    token:
        Literal placeholder to look for.
    replacement:
        Literal value inserted in place of ``token``.
    policy:
        Selects the occurrences that are replaced.
    expected:
        Exact number of occurrences ``text`` must contain. ``None`` skips the
        check; positional policies still require the token to be present.
    """

    actual = count_occurrences(text, token)
    if expected is not None and actual != expected:
        if actual == 0:
            raise TokenNotFoundError(token)
        raise TokenCountError(token, expected, actual)

    if policy is ReplacementPolicy.ALL:
        return replace_all(text, token, replacement)
    if policy is ReplacementPolicy.FIRST:
        return replace_first(text, token, replacement)
    if policy is ReplacementPolicy.LAST:
        return replace_last(text, token, replacement)

    if actual < 2:
        if actual == 0:
            raise TokenNotFoundError(token)
        raise TokenCountError(token, 2, actual)
    # Last first, so the first match's index is unaffected by the splice.
    text = replace_last(text, token, replacement)
    return replace_first(text, token, replacement)
