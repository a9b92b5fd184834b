from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from .context import OSName


@runtime_checkable
class PlatformPaths(Protocol):
    """Protocol implemented by platform directory providers.

    `Context` is the stock implementation; anything exposing the same
    attributes can stand in for it when resolving directories.
    """

    os: OSName
    home: Path
    cwd: Path
    temp_dir: Path
    cache_home: Path
    config_home: Path
    argv0: str

    @property
    def process_name(self) -> str:
        """Base name of the running program."""
