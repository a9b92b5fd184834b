from __future__ import annotations

import logging
import os
import shutil
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from .api import PlatformPaths
from .context import Context
from .directory import Directory
from .errors import DirectoryInitError, InvalidStateError, TempDirError, UnsafeOperationError
from .keys import REGISTRY_ORDER, DirectoryKind, KindLike, default_aliases, normalize_kind
from .transcode import StrPath, clean, join
from . import transcode

if TYPE_CHECKING:
    from .config import AppDirsConfig

logger = logging.getLogger(__name__)


def _is_within(path: str, root: str) -> bool:
    return path == root or path.startswith(root.rstrip(os.sep) + os.sep)


class AppDirs:
    """The cache, config, home, temp and workspace directories of an app.

    Each directory's keywords feed two maps: keyword -> path, used by
    `make_absolute`, and path -> first keyword, used by `parameterize`.
    Replacing an already assigned directory rebuilds both maps in
    `REGISTRY_ORDER`; assigning a new kind only adds its keywords, so for
    new kinds the assignment order decides which keyword wins a shared path.

    Instances are not thread-safe, callers sharing one must serialize
    `assign` themselves.
    """

    def __init__(self, *, context: PlatformPaths | None = None) -> None:
        self._context = context
        self._dirs: dict[DirectoryKind, Directory] = {}
        self._keywords: dict[str, str] = {}
        self._reverse: dict[str, str] = {}

    @classmethod
    def new(
        cls,
        app_name: str,
        *,
        context: PlatformPaths | None = None,
        config: "AppDirsConfig | None" = None,
    ) -> "AppDirs":
        """Create all five directories of `app_name` with their defaults.

        Entries of `config` replace the default path and keywords of their
        kind.
        """

        try:
            ctx = context or Context.from_env()
        except (OSError, RuntimeError, KeyError) as exc:
            # the cache directory is the first one built
            raise DirectoryInitError(str(DirectoryKind.CACHE)) from exc
        dirs = cls(context=ctx)
        for kind in DirectoryKind:
            options = config.options(kind) if config is not None else None
            dirs._dirs[kind] = Directory.new(
                kind, app_name, options, context=ctx)
        dirs._rebuild_keywords()
        return dirs

    @property
    def context(self) -> PlatformPaths:
        if self._context is None:
            self._context = Context.from_env()
        return self._context

    def assign(self, directory: Directory) -> None:
        """Install `directory` for its kind, replacing any previous one.

        A directory without keywords gets the defaults of its kind.
        """

        kind = directory.kind
        aliases = directory.aliases or default_aliases(kind, self.context.os)
        stored = Directory(kind, directory.path, aliases)

        replaced = kind in self._dirs
        self._dirs[kind] = stored
        if replaced:
            logger.debug("replaced %s directory, rebuilding keywords", kind)
            self._rebuild_keywords()
        else:
            self._add_keywords(stored)

    def _add_keywords(self, directory: Directory) -> None:
        for i, alias in enumerate(directory.aliases):
            self._keywords[alias] = directory.path
            if i == 0:
                self._reverse[directory.path] = alias

    def _rebuild_keywords(self) -> None:
        self._keywords.clear()
        self._reverse.clear()
        for kind in REGISTRY_ORDER:
            directory = self._dirs.get(kind)
            if directory is not None:
                self._add_keywords(directory)

    def directory(self, kind: KindLike) -> Directory | None:
        """Return a copy of the directory assigned to `kind`, if any."""

        directory = self._dirs.get(normalize_kind(kind))
        return directory.copy() if directory is not None else None

    @property
    def keywords(self) -> Mapping[str, str]:
        return MappingProxyType(self._keywords)

    @property
    def reverse_keywords(self) -> Mapping[str, str]:
        return MappingProxyType(self._reverse)

    def _path(self, kind: DirectoryKind) -> str:
        directory = self._dirs.get(kind)
        return directory.path if directory is not None else ""

    @property
    def cache(self) -> str:
        return self._path(DirectoryKind.CACHE)

    @property
    def config(self) -> str:
        return self._path(DirectoryKind.CONFIG)

    @property
    def home(self) -> str:
        return self._path(DirectoryKind.HOME)

    @property
    def temp(self) -> str:
        return self._path(DirectoryKind.TEMP)

    @property
    def workspace(self) -> str:
        return self._path(DirectoryKind.WORKSPACE)

    # -- temp directory lifecycle

    def create_temp(self, mode: int = 0o755) -> None:
        """Create the temp directory unless it already exists."""

        path = self.temp
        if not path:
            raise InvalidStateError(
                "cannot create temp directory, invalid state")
        if os.path.isdir(path):
            return
        if os.path.lexists(path):
            raise TempDirError(
                f"cannot create temp directory, duplicate name: '{path}'")
        try:
            os.mkdir(path, mode)
        except OSError as exc:
            raise TempDirError(f"cannot create temp directory: {path}") from exc
        logger.debug("created temp directory %s", path)

    def remove_temp(self, subdir: StrPath = "") -> None:
        """Delete `subdir` of the temp directory, including its contents.

        The target must lie strictly below the platform temp root, anything
        else raises `UnsafeOperationError`. A missing target is not an error.
        """

        temp = self.temp
        if not temp:
            raise InvalidStateError(
                "temp directory is not configured correctly")

        tmp_root = clean(self.context.temp_dir)
        target = join(temp, os.fspath(subdir))
        if not _is_within(target, tmp_root):
            raise UnsafeOperationError("temp directory is considered unsafe")
        if target == tmp_root:
            raise UnsafeOperationError(
                "expected a subdirectory within the temp directory")

        if os.path.isdir(target) and not os.path.islink(target):
            shutil.rmtree(target)
        elif os.path.lexists(target):
            os.remove(target)
        logger.debug("removed temp directory %s", target)

    def recreate_temp(self, subdir: StrPath = "", mode: int = 0o755) -> None:
        """Replace `subdir` of the temp directory by an empty directory."""

        self.remove_temp(subdir)
        path = join(self.temp, os.fspath(subdir))
        try:
            os.mkdir(path, mode)
        except OSError as exc:
            raise TempDirError(f"cannot create temp directory: {path}") from exc

    # -- keyword substitution

    def make_absolute(self, base: StrPath, value: StrPath) -> str:
        """Expand keywords in `value`, e.g. ``$CACHE/logs``, to an absolute path."""

        return transcode.make_absolute(
            self._keywords, base, value, context=self._context)

    def make_relative(self, base: StrPath, value: StrPath) -> str:
        return transcode.make_relative(
            self._keywords, base, value, context=self._context)

    def parameterize(self, base: StrPath, value: StrPath) -> str:
        """Replace known directories in `value` by their first keyword."""

        return transcode.parameterize(self._reverse, base, value)
