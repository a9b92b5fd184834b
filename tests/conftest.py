from __future__ import annotations

from pathlib import Path

import pytest

from appworkspace.context import Context

APP_NAME = "Test"


@pytest.fixture
def ctx(tmp_path: Path) -> Context:
    """A context whose every directory lives below `tmp_path`.

    The workspace (working directory) is nested inside home and the process
    is named after the app, so it is treated as an installed binary.
    """

    home = tmp_path / "home"
    workspace = home / "project"
    temp_root = tmp_path / "tmp"
    for p in (home, workspace, temp_root):
        p.mkdir(parents=True)

    return Context.from_env(
        {"HOME": str(home)},
        home=home,
        cwd=workspace,
        temp_dir=temp_root,
        argv0=f"/usr/local/bin/{APP_NAME}",
    )
