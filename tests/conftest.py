"""Shared pytest fixtures for tplrender tests."""

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing text files below tmp_path."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from tmp_path so relative inputs and outputs resolve there."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def templates_tree(workdir: Path, write_file: Callable[[str, str], Path]) -> Path:
    """Create templates/ with a nested template and a top-level one."""
    write_file("templates/deep/ok2.txt.tpl", "deep {{ name }}")
    write_file("templates/ok.txt.tpl", "top {{ name }}")
    return workdir / "templates"
