from __future__ import annotations

import logging
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .context import Context
from .directory import DirectoryOptions
from .errors import AppDirsError
from .keys import DirectoryKind, KindLike, normalize_kind

logger = logging.getLogger(__name__)


class AppDirsConfigError(AppDirsError, ValueError):
    """Raised when config TOML cannot be parsed/validated."""


_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")

_DIR_FIELDS = frozenset({"path", "aliases"})


def default_config_path(ctx: Context, app_name: str) -> Path:
    """Return the OS-appropriate default config file path."""

    return ctx.config_home / app_name / "dirs.toml"


def _expand_env_vars(value: str, env: Mapping[str, str]) -> str:
    def repl(match: re.Match[str]) -> str:
        var = match.group(1) or match.group(2)
        if not var:
            return match.group(0)
        return env.get(var, match.group(0))

    return _ENV_VAR_PATTERN.sub(repl, value)


def _expand_user(value: str, home: Path) -> str:
    # pass home to make tests easier
    if value == "~":
        return str(home)
    if value.startswith("~/") or value.startswith("~\\"):
        return str(home) + value[1:]
    return value


def _parse_path(
    raw: Any,
    *,
    env: Mapping[str, str],
    home: Path,
    base_dir: Path,
    where: str,
) -> Path:
    if not isinstance(raw, str):
        raise AppDirsConfigError(
            f"{where} must be a string path but got {type(raw).__name__}")

    raw_str = raw.strip()
    if not raw_str:
        raise AppDirsConfigError(f"{where} cannot be an empty path")

    expanded = _expand_user(raw_str, home)
    expanded = _expand_env_vars(expanded, env)
    p = Path(expanded)
    if not p.is_absolute():
        p = base_dir / p
    return p


def _parse_aliases(raw: Any, *, where: str) -> tuple[str, ...]:
    # keywords are taken literally, "$CACHE" must not be env-expanded
    if not isinstance(raw, list):
        raise AppDirsConfigError(
            f"{where} must be a list of strings but got {type(raw).__name__}")

    aliases: list[str] = []
    for i, item in enumerate(raw):
        if not isinstance(item, str) or not item.strip():
            raise AppDirsConfigError(
                f"{where}[{i}] must be a non-empty string")
        aliases.append(item.strip())
    return tuple(aliases)


@dataclass(frozen=True, slots=True)
class AppDirsConfig:
    """Per-kind directory overrides, usually read from a TOML file.

    `source` is the file the config came from. Its folder doubles as the
    config directory unless `dirs.config.path` says otherwise.
    """

    dirs: Mapping[KindLike, DirectoryOptions] = field(default_factory=dict)
    source: Path | None = None

    def __post_init__(self) -> None:
        normalized: dict[KindLike, DirectoryOptions] = {}
        for kind, opts in dict(self.dirs).items():
            normalized[normalize_kind(kind)] = opts
        object.__setattr__(self, "dirs", MappingProxyType(normalized))

    def options(self, kind: KindLike) -> DirectoryOptions:
        """Return the options to build the directory of `kind` with."""

        kind = normalize_kind(kind)
        opts = self.dirs.get(kind, DirectoryOptions())
        if (
            kind is DirectoryKind.CONFIG
            and opts.path is None
            and self.source is not None
        ):
            return DirectoryOptions(path=self.source.parent, aliases=opts.aliases)
        return opts

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        *,
        env: Mapping[str, str] | None = None,
        context: Context | None = None,
    ) -> "AppDirsConfig":
        config_path = Path(path).absolute()
        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            raise AppDirsConfigError(
                f"{config_path} is not valid TOML: {exc}") from exc
        logger.debug("loaded directory config from %s", config_path)
        config = cls.from_mapping(
            data,
            base_dir=config_path.parent,
            env=env,
            context=context,
        )
        return cls(dirs=config.dirs, source=config_path)

    @classmethod
    def load(
        cls,
        path: str | Path,
        *,
        env: Mapping[str, str] | None = None,
        context: Context | None = None,
    ) -> "AppDirsConfig | None":
        config_path = Path(path)
        if not config_path.exists():
            return None
        return cls.from_file(config_path, env=env, context=context)

    @classmethod
    def load_default(
        cls,
        app_name: str,
        ctx: Context,
        *,
        env: Mapping[str, str] | None = None,
    ) -> "AppDirsConfig | None":
        return cls.load(default_config_path(ctx, app_name), env=env, context=ctx)

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        *,
        base_dir: Path,
        env: Mapping[str, str] | None = None,
        context: Context | None = None,
    ) -> "AppDirsConfig":
        if not isinstance(data, Mapping):
            raise AppDirsConfigError(
                "Config root must be a TOML table or object")

        ctx = context or Context.from_env(env)
        env_map = ctx.env if env is None else env

        raw_dirs = data.get("dirs", {})
        if raw_dirs is None:
            raw_dirs = {}
        if not isinstance(raw_dirs, Mapping):
            raise AppDirsConfigError(
                "`dirs` must be a TOML table or object")

        dirs: dict[KindLike, DirectoryOptions] = {}
        for raw_kind, raw_tbl in raw_dirs.items():
            try:
                kind = normalize_kind(str(raw_kind))
            except ValueError:
                raise AppDirsConfigError(
                    f"`dirs.{raw_kind}` is not a known directory kind") from None
            if not isinstance(raw_tbl, Mapping):
                raise AppDirsConfigError(
                    f"`dirs.{kind}` must be a TOML table or object")

            unknown = set(raw_tbl) - _DIR_FIELDS
            if unknown:
                raise AppDirsConfigError(
                    f"`dirs.{kind}` has unknown keys: {', '.join(sorted(unknown))}")

            path: Path | None = None
            if raw_tbl.get("path") is not None:
                path = _parse_path(
                    raw_tbl["path"],
                    env=env_map,
                    home=ctx.home,
                    base_dir=base_dir,
                    where=f"dirs.{kind}.path",
                )

            aliases: tuple[str, ...] = ()
            if raw_tbl.get("aliases") is not None:
                aliases = _parse_aliases(
                    raw_tbl["aliases"], where=f"dirs.{kind}.aliases")

            dirs[kind] = DirectoryOptions(path=path, aliases=aliases)

        return cls(dirs=dirs)
