from __future__ import annotations

from enum import StrEnum
from typing import TypeAlias


class DirectoryKind(StrEnum):
    """The application directories managed by `AppDirs`.

    The set is closed: cache, config, home, workspace and temp. Members also
    carry a 1-based ordinal (see `ordinal`) so callers holding plain integers
    can still address a kind.
    """

    CACHE = "cache"
    CONFIG = "config"
    HOME = "home"
    WORKSPACE = "workspace"
    TEMP = "temp"

    @property
    def ordinal(self) -> int:
        return _ORDINALS.index(self) + 1


KindLike: TypeAlias = DirectoryKind | str | int

_ORDINALS: tuple[DirectoryKind, ...] = tuple(DirectoryKind)

# keyword maps are rebuilt in this order, later entries win on collisions
REGISTRY_ORDER: tuple[DirectoryKind, ...] = (
    DirectoryKind.CACHE,
    DirectoryKind.CONFIG,
    DirectoryKind.HOME,
    DirectoryKind.TEMP,
    DirectoryKind.WORKSPACE,
)

_DEFAULT_ALIASES: dict[DirectoryKind, tuple[str, ...]] = {
    DirectoryKind.CACHE: ("$CACHE", "${CACHE}"),
    DirectoryKind.CONFIG: (),
    DirectoryKind.HOME: ("$HOME", "${HOME}"),
    DirectoryKind.WORKSPACE: (
        "$workspaceRoot", "${workspaceRoot}", "$PWD", "${PWD}"),
    DirectoryKind.TEMP: (
        "$TEMP", "${TEMP}", "$TMP", "${TMP}",
        "$TMPDIR", "${TMPDIR}", "$TEMPDIR", "${TEMPDIR}",
    ),
}


def normalize_kind(key: KindLike) -> DirectoryKind:
    """Return the `DirectoryKind` for `key` or raise `ValueError`."""

    if isinstance(key, DirectoryKind):
        return key
    # bool is an int subclass but never a meaningful ordinal
    if isinstance(key, int) and not isinstance(key, bool):
        if 1 <= key <= len(_ORDINALS):
            return _ORDINALS[key - 1]
        raise ValueError(f"Invalid directory kind: {key!r}")
    if isinstance(key, str):
        try:
            return DirectoryKind(key.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid directory kind: {key!r}") from None
    raise ValueError(f"Invalid directory kind: {key!r}")


def kind_name(key: object) -> str:
    """Return the lowercase name of a kind, or "" when `key` is not one."""

    try:
        return str(normalize_kind(key))  # type: ignore[arg-type]
    except ValueError:
        return ""


def default_aliases(kind: KindLike, os_name: str) -> tuple[str, ...]:
    """Return the default keywords for `kind` on the given platform.

    `~` is a home alias everywhere except Windows.
    """

    kind = normalize_kind(kind)
    aliases = _DEFAULT_ALIASES[kind]
    if kind is DirectoryKind.HOME and os_name != "windows":
        aliases = aliases + ("~",)
    return aliases
