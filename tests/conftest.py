"""Shared fixtures for nmclean tests."""

import pytest

from nmclean.exclusions import ExcludedPaths


@pytest.fixture
def no_excluded():
    """Exclusion set with no entries."""
    return ExcludedPaths()


@pytest.fixture
def project_tree(tmp_path):
    """
    Build a small tree of projects.

    root/a/node_modules/x.txt        (10 bytes)
    root/b/c/node_modules/y.txt      (20 bytes)
    root/.git/node_modules/z.txt     (hidden, never scanned)
    """
    root = tmp_path / "root"

    a = root / "a" / "node_modules"
    a.mkdir(parents=True)
    (a / "x.txt").write_bytes(b"x" * 10)

    c = root / "b" / "c" / "node_modules"
    c.mkdir(parents=True)
    (c / "y.txt").write_bytes(b"y" * 20)

    hidden = root / ".git" / "node_modules"
    hidden.mkdir(parents=True)
    (hidden / "z.txt").write_bytes(b"z" * 40)

    return root


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep Rich from wrapping long temporary paths in captured output."""
    from nmclean.display import console

    monkeypatch.setattr(console, "width", 400)
