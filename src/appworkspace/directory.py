from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Sequence

from .api import PlatformPaths
from .context import Context
from .errors import DirectoryInitError, InvalidPathError
from .keys import DirectoryKind, KindLike, default_aliases, normalize_kind
from .root import root
from .transcode import StrPath, clean


@dataclass(frozen=True, slots=True)
class DirectoryOptions:
    """Optional settings for `Directory.new`.

    path:    absolute path of the directory. When unset the platform default
             for the kind is used.
    aliases: keywords that stand for the directory. When empty the kind's
             default keywords are used.
    """

    path: StrPath | None = None
    aliases: Sequence[str] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "aliases", tuple(self.aliases))


def _unique(aliases: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(aliases))


class Directory:
    """One managed directory: its kind, absolute path and keywords.

    The path is always absolute and clean. Keywords are only changed through
    `append_aliases` and `remove_aliases`; `aliases` hands out a copy.
    """

    __slots__ = ("_kind", "_path", "_aliases")

    def __init__(
        self,
        kind: KindLike,
        path: StrPath,
        aliases: Iterable[str] = (),
    ) -> None:
        raw = os.fspath(path)
        if not os.path.isabs(raw):
            raise InvalidPathError(raw)
        self._kind = normalize_kind(kind)
        self._path = clean(raw)
        self._aliases = _unique(aliases)

    @classmethod
    def new(
        cls,
        kind: KindLike,
        app_name: str,
        options: DirectoryOptions | None = None,
        *,
        context: PlatformPaths | None = None,
    ) -> "Directory":
        """Create a directory, filling in platform defaults.

        Without an explicit path, cache and temp live in an `app_name`
        folder below the platform cache/temp directory, config and workspace
        resolve to the workspace root (see `root`), and home is the user's
        home directory.

        Raises `InvalidPathError` for a relative explicit path and
        `DirectoryInitError` when a platform lookup fails.
        """

        kind = normalize_kind(kind)
        opts = options or DirectoryOptions()

        explicit = os.fspath(opts.path) if opts.path is not None else ""
        if explicit and not os.path.isabs(explicit):
            raise InvalidPathError(explicit)

        path = explicit
        aliases = opts.aliases
        if not (path and aliases):
            # a platform lookup is only needed for what was left unset
            try:
                ctx = context or Context.from_env()
                path = path or _default_path(kind, app_name, ctx)
                aliases = aliases or default_aliases(kind, ctx.os)
            except (OSError, RuntimeError, KeyError) as exc:
                raise DirectoryInitError(str(kind)) from exc

        return cls(kind, path, aliases)

    @property
    def kind(self) -> DirectoryKind:
        return self._kind

    @property
    def path(self) -> str:
        return self._path

    @property
    def aliases(self) -> list[str]:
        return list(self._aliases)

    def append_aliases(self, *aliases: str) -> None:
        """Add keywords not present yet. Keywords end up sorted afterwards."""

        for alias in aliases:
            if alias not in self._aliases:
                self._aliases.append(alias)
        self._aliases.sort()

    def remove_aliases(self, *aliases: str) -> None:
        """Drop the given keywords; unknown ones are ignored."""

        for alias in aliases:
            if alias in self._aliases:
                self._aliases.remove(alias)

    def copy(self) -> "Directory":
        return Directory(self._kind, self._path, self._aliases)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Directory):
            return NotImplemented
        return (
            self._kind == other._kind
            and self._path == other._path
            and self._aliases == other._aliases
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Directory(kind={str(self._kind)!r}, path={self._path!r}, "
            f"aliases={self._aliases!r})"
        )


def _default_path(kind: DirectoryKind, app_name: str, ctx: PlatformPaths) -> str:
    if kind is DirectoryKind.CACHE:
        return os.path.join(ctx.cache_home, app_name)
    if kind in (DirectoryKind.CONFIG, DirectoryKind.WORKSPACE):
        return root(app_name, context=ctx)
    if kind is DirectoryKind.HOME:
        return os.fspath(ctx.home)
    return os.path.join(ctx.temp_dir, app_name)
