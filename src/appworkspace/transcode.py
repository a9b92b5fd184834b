from __future__ import annotations

import os
from typing import Mapping

from .api import PlatformPaths
from .context import _detect_os_name, _home_from_env

StrPath = str | os.PathLike[str]


def clean(path: StrPath) -> str:
    """Return the shortest equivalent form of `path` (``.``/``..`` folded)."""

    cleaned = os.path.normpath(os.fspath(path))
    # posix normpath keeps exactly two leading slashes, fold them as well
    if os.name != "nt" and cleaned.startswith("//") and not cleaned.startswith("///"):
        cleaned = cleaned[1:]
    return cleaned


def join(*parts: str) -> str:
    """Join non-empty `parts` with the separator and clean the result.

    Unlike `os.path.join` an absolute part does not discard what came before.
    """

    present = [p for p in parts if p]
    if not present:
        return ""
    return clean(os.sep.join(present))


def _relative(base: str, target: str) -> str | None:
    if os.path.isabs(base) != os.path.isabs(target):
        return None
    try:
        return os.path.relpath(target, base)
    except ValueError:
        # different drives on windows, or an empty path
        return None


def _expand_tilde(path: str, context: PlatformPaths | None) -> str:
    try:
        if context is not None:
            os_name, home = context.os, context.home
        else:
            os_name = _detect_os_name()
            home = _home_from_env(os_name, os.environ)
    except (OSError, RuntimeError, KeyError):
        # no home directory to expand to, leave the ~ in place
        return path
    if os_name == "windows":
        return path
    return path.replace("~", os.fspath(home), 1)


def abs_path(
    base: StrPath,
    path: StrPath,
    *,
    context: PlatformPaths | None = None,
) -> str:
    """Return `path` as a clean absolute path.

    A leading ``~`` is replaced by the home directory (not on Windows).
    Relative paths are resolved against `base`.
    """

    base = os.fspath(base)
    path = os.fspath(path)
    if path.startswith("~"):
        path = _expand_tilde(path, context)
    if os.path.isabs(path):
        return clean(path)
    return clean(os.path.join(base, path))


def make_absolute(
    keywords: Mapping[str, str],
    base: StrPath,
    value: StrPath,
    *,
    context: PlatformPaths | None = None,
) -> str:
    """Expand keyword segments of `value` and resolve it against `base`.

    Only complete segments are substituted: ``$TEMP/x`` expands while
    ``$TEMPx`` is kept literally.
    """

    text = os.fspath(value)
    result = ""
    for segment in text.split(os.sep):
        result = join(result, keywords.get(segment) or segment)

    # an unknown leading token can leave an absolute input relative
    if os.path.isabs(text) and not os.path.isabs(result) and os.name != "nt":
        result = os.sep + result
    return abs_path(base, result, context=context)


def make_relative(
    keywords: Mapping[str, str],
    base: StrPath,
    value: StrPath,
    *,
    context: PlatformPaths | None = None,
) -> str:
    """Expand `value` like `make_absolute`, then express it relative to `base`.

    Falls back to the cleaned `value` when no relative form exists.
    """

    absolute = make_absolute(keywords, base, value, context=context)
    rel = _relative(os.fspath(base), absolute)
    if rel is None:
        return clean(value)
    return rel


def parameterize(
    reverse_keywords: Mapping[str, str],
    base: StrPath,
    value: StrPath,
) -> str:
    """Replace directory paths inside `value` by their keyword.

    Longer directory paths are replaced first so a workspace nested in the
    home directory becomes ``$workspaceRoot/...`` rather than ``$HOME/...``.

    Matching is plain substring replacement, not bound to path segments as
    in `make_absolute`, so the two are not exact inverses: a directory path
    occurring inside an unrelated path is still replaced.
    """

    text = os.fspath(value)
    ordered = sorted(
        reverse_keywords.items(), key=lambda item: len(item[0]), reverse=True)
    for path, alias in ordered:
        text = text.replace(path, alias)
    text = text.removesuffix(os.sep)

    if os.path.isabs(text):
        return text
    rel = _relative(os.fspath(base), text)
    if rel is None:
        return clean(text)
    return rel
