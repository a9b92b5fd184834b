from __future__ import annotations


class AppDirsError(Exception):
    """Base class for every error raised by appworkspace."""


class InvalidPathError(AppDirsError, ValueError):
    """Raised when an explicit directory path is not absolute."""

    def __init__(self, path: str) -> None:
        super().__init__(f"cannot process relative path: {path}")
        self.path = path


class DirectoryInitError(AppDirsError):
    """Raised when the platform cannot supply a directory's default path.

    The failing lookup is chained as ``__cause__``.
    """

    def __init__(self, kind: str) -> None:
        super().__init__(f"cannot initialize directory: {kind}")
        self.kind = kind


class RootNotFoundError(AppDirsError, FileNotFoundError):
    """Raised when no workspace root marker exists above the working dir."""

    def __init__(self, marker: str) -> None:
        super().__init__(
            f"cannot identify workspace root (no {marker} repository found)")
        self.marker = marker


class InvalidStateError(AppDirsError):
    """Raised when an operation needs a directory that was never assigned."""


class UnsafeOperationError(AppDirsError):
    """Raised when a destructive temp operation targets an unsafe path."""


class TempDirError(AppDirsError, OSError):
    """Raised when a temp directory cannot be created."""

