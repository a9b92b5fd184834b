from __future__ import annotations

from pathlib import Path

from appworkspace.api import PlatformPaths
from appworkspace.context import Context


def test_linux_prefers_xdg_variables(tmp_path: Path) -> None:
    env = {
        "HOME": str(tmp_path),
        "XDG_CACHE_HOME": str(tmp_path / "xdg-cache"),
        "XDG_CONFIG_HOME": str(tmp_path / "xdg-config"),
    }
    ctx = Context.from_env(env, os_name="linux", cwd=tmp_path)

    assert ctx.home == tmp_path
    assert ctx.cache_home == tmp_path / "xdg-cache"
    assert ctx.config_home == tmp_path / "xdg-config"


def test_linux_falls_back_to_dot_dirs(tmp_path: Path) -> None:
    ctx = Context.from_env({"HOME": str(tmp_path)}, os_name="linux", cwd=tmp_path)

    assert ctx.cache_home == tmp_path / ".cache"
    assert ctx.config_home == tmp_path / ".config"


def test_macos_uses_library(tmp_path: Path) -> None:
    ctx = Context.from_env({}, os_name="macos", home=tmp_path, cwd=tmp_path)

    assert ctx.cache_home == tmp_path / "Library" / "Caches"
    assert ctx.config_home == tmp_path / "Library" / "Application Support"


def test_windows_uses_appdata(tmp_path: Path) -> None:
    env = {
        "USERPROFILE": str(tmp_path),
        "LOCALAPPDATA": str(tmp_path / "Local"),
        "APPDATA": str(tmp_path / "Roaming"),
    }
    ctx = Context.from_env(env, os_name="windows", cwd=tmp_path)

    assert ctx.home == tmp_path
    assert ctx.cache_home == tmp_path / "Local"
    assert ctx.config_home == tmp_path / "Roaming"


def test_process_name_is_argv0_basename(tmp_path: Path) -> None:
    ctx = Context.from_env({}, home=tmp_path, cwd=tmp_path, argv0="/opt/tools/bin/myapp")

    assert ctx.process_name == "myapp"


def test_context_satisfies_platform_paths(ctx: Context) -> None:
    assert isinstance(ctx, PlatformPaths)
