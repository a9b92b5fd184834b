from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Mapping, TypeAlias

OSName: TypeAlias = Literal["windows", "macos", "linux"]


def _detect_os_name() -> OSName:
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "macos"
    if sys.platform.startswith("linux"):
        return "linux"
    raise RuntimeError(f"Unsupported platform: {sys.platform!r}")


def _home_from_env(os_name: OSName, env: Mapping[str, str]) -> Path:
    # pref env values so tests can inject a fake env
    if os_name == "windows":
        value = env.get("USERPROFILE")
    else:
        value = env.get("HOME")
    return Path(value) if value else Path.home()


@dataclass(frozen=True, slots=True)
class Context:
    """OS/process facts the directory defaults are derived from."""

    os: OSName
    env: Mapping[str, str]
    home: Path
    cwd: Path
    temp_dir: Path
    config_home: Path
    cache_home: Path
    argv0: str

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        *,  # force all following args to be keyword-only
        os_name: OSName | None = None,
        home: Path | None = None,
        cwd: Path | None = None,
        temp_dir: Path | None = None,
        argv0: str | None = None,
    ) -> "Context":
        env_map: Mapping[str, str] = os.environ if env is None else env

        detected_os = os_name or _detect_os_name()
        resolved_home = home or _home_from_env(detected_os, env_map)
        resolved_cwd = cwd or Path.cwd()
        resolved_temp = temp_dir or Path(tempfile.gettempdir())
        resolved_argv0 = sys.argv[0] if argv0 is None else argv0

        if detected_os == "linux":
            config_home = Path(env_map.get(
                "XDG_CONFIG_HOME", resolved_home / ".config"))
            cache_home = Path(env_map.get(
                "XDG_CACHE_HOME", resolved_home / ".cache"))
        elif detected_os == "macos":
            library = resolved_home / "Library"
            config_home = library / "Application Support"
            cache_home = library / "Caches"
        else:  # windows
            appdata = env_map.get("APPDATA")
            localappdata = env_map.get("LOCALAPPDATA")

            config_home = Path(
                appdata) if appdata else resolved_home / "AppData" / "Roaming"
            cache_home = (
                Path(localappdata) if localappdata else resolved_home /
                "AppData" / "Local"
            )

        return cls(
            os=detected_os,
            env=env_map,
            home=resolved_home,
            cwd=resolved_cwd,
            temp_dir=resolved_temp,
            config_home=config_home,
            cache_home=cache_home,
            argv0=resolved_argv0,
        )

    @property
    def process_name(self) -> str:
        """Base name of the running program, e.g. `myapp` for `/usr/bin/myapp`."""

        return os.path.basename(self.argv0)
