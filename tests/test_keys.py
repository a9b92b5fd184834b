from __future__ import annotations

import pytest

from appworkspace.keys import (
    REGISTRY_ORDER,
    DirectoryKind,
    default_aliases,
    kind_name,
    normalize_kind,
)


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (DirectoryKind.CACHE, "cache"),
        (DirectoryKind.CONFIG, "config"),
        (DirectoryKind.HOME, "home"),
        (DirectoryKind.WORKSPACE, "workspace"),
        (DirectoryKind.TEMP, "temp"),
    ],
)
def test_kind_names(kind: DirectoryKind, expected: str) -> None:
    assert str(kind) == expected
    assert kind_name(kind) == expected


@pytest.mark.parametrize("value", [0, -1, 6, 99, "bogus", "", None, True, 1.0])
def test_kind_name_is_empty_for_invalid_values(value: object) -> None:
    assert kind_name(value) == ""


def test_kinds_have_one_based_ordinals() -> None:
    assert [k.ordinal for k in DirectoryKind] == [1, 2, 3, 4, 5]
    assert normalize_kind(1) is DirectoryKind.CACHE
    assert normalize_kind(5) is DirectoryKind.TEMP
    assert kind_name(4) == "workspace"


def test_normalize_kind_accepts_names() -> None:
    assert normalize_kind(" Home ") is DirectoryKind.HOME

    with pytest.raises(ValueError, match="Invalid directory kind"):
        normalize_kind("data")
    with pytest.raises(ValueError, match="Invalid directory kind"):
        normalize_kind(0)


def test_registry_order_puts_workspace_last() -> None:
    assert REGISTRY_ORDER == (
        DirectoryKind.CACHE,
        DirectoryKind.CONFIG,
        DirectoryKind.HOME,
        DirectoryKind.TEMP,
        DirectoryKind.WORKSPACE,
    )


def test_default_aliases() -> None:
    assert default_aliases(DirectoryKind.CACHE, "linux") == ("$CACHE", "${CACHE}")
    assert default_aliases(DirectoryKind.CONFIG, "linux") == ()
    assert default_aliases(DirectoryKind.WORKSPACE, "linux") == (
        "$workspaceRoot", "${workspaceRoot}", "$PWD", "${PWD}")
    assert default_aliases("temp", "macos") == (
        "$TEMP", "${TEMP}", "$TMP", "${TMP}",
        "$TMPDIR", "${TMPDIR}", "$TEMPDIR", "${TEMPDIR}",
    )


def test_tilde_is_a_home_alias_except_on_windows() -> None:
    assert default_aliases(DirectoryKind.HOME, "linux") == ("$HOME", "${HOME}", "~")
    assert default_aliases(DirectoryKind.HOME, "macos") == ("$HOME", "${HOME}", "~")
    assert default_aliases(DirectoryKind.HOME, "windows") == ("$HOME", "${HOME}")
