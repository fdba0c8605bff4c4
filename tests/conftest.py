"""Shared test fixtures for Tempo Insight."""

import os
from pathlib import Path

import pytest

from tempo_insight.temporal.models import Commit

BASE_TS = 1_700_000_000


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def make_commit():
    """Factory: commit number ``index`` made ``minute`` minutes after BASE_TS."""

    def _make(index: int, minute: float) -> Commit:
        return Commit(
            hash=f"{index:040x}",
            timestamp=BASE_TS + int(minute * 60),
            author="dev@example.com",
            subject=f"Commit {index}",
        )

    return _make


@pytest.fixture
def source_body():
    """Factory: text with exactly ``lines`` lines, starting with ``prefix``."""

    def _body(lines: int, prefix: str = "") -> str:
        head = prefix.split("\n") if prefix else []
        filler = [f"const v{i} = {i};" for i in range(lines - len(head))]
        return "\n".join(head + filler)

    return _body


@pytest.fixture
def repo(tmp_path):
    """Empty source tree; call ``repo.write(rel_path, content)`` to add files."""
    root = tmp_path / "repo"
    root.mkdir()

    class _Repo:
        path = root

        @staticmethod
        def write(rel_path: str, content: str) -> Path:
            target = root / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
            return target

    return _Repo()


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """No global/project config files and no TEMPO_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for key in list(os.environ):
        if key.startswith("TEMPO_"):
            monkeypatch.delenv(key)
    return work
