from __future__ import annotations

import logging
import os

from .api import PlatformPaths
from .context import Context
from .errors import RootNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_MARKER = ".git"


def root(
    app_name: str,
    *,
    marker: str = DEFAULT_MARKER,
    context: PlatformPaths | None = None,
) -> str:
    """Return the workspace root for `app_name`.

    When the running program is called `app_name` it is treated as an
    installed binary and the working directory is returned as is. Otherwise
    the program runs from source (a test runner, `python -m`, ...) and the
    working directory and its parents are searched for a `marker` directory.
    The first directory containing one is the root.

    Raises `RootNotFoundError` once the filesystem (or drive) root has been
    checked without a match.
    """

    ctx = context or Context.from_env()
    cwd = os.fspath(ctx.cwd)

    if ctx.process_name == app_name:
        logger.debug("running as %s binary, workspace is %s", app_name, cwd)
        return cwd

    current = cwd
    while True:
        if os.path.isdir(os.path.join(current, marker)):
            logger.debug("found %s in %s", marker, current)
            return current
        parent = os.path.dirname(current)
        # dirname is a fixpoint on "/" and on drive roots
        if parent == current:
            raise RootNotFoundError(marker)
        current = parent
