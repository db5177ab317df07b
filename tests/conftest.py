"""Shared pytest fixtures."""

import os
import shutil
import subprocess
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test-local resources."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment from leaking into tests."""
    for name in (
        "CTXLINE_COLOR",
        "CTXLINE_GIT_TIMEOUT",
        "CTXLINE_CONTEXT_WINDOW",
        "NO_COLOR",
        "FORCE_COLOR",
        "TTY_COMPATIBLE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def full_payload() -> dict[str, Any]:
    """A payload in the host's nested format with every field set."""
    return {
        "hook_event_name": "Status",
        "session_id": "abc123",
        "cwd": "/home/u/my-project",
        "model": {"id": "claude-opus-4", "display_name": "Opus"},
        "workspace": {
            "current_dir": "/home/u/my-project",
            "project_dir": "/home/u/my-project",
        },
        "cost": {
            "total_cost_usd": 0.0123,
            "total_duration_ms": 45000,
            "total_lines_added": 156,
            "total_lines_removed": 23,
        },
        "context_window": {
            "total_input_tokens": 15234,
            "context_window_size": 200000,
            "used_percentage": 8.5,
            "current_usage": {
                "input_tokens": 15234,
                "output_tokens": 1200,
                "cache_creation_input_tokens": 500,
                "cache_read_input_tokens": 266,
            },
        },
    }


@pytest.fixture
def flat_payload() -> dict[str, Any]:
    """A payload using the flat shorthand keys."""
    return {
        "model": "Opus",
        "cwd": "/home/u/my-project",
        "tokens_used": 6384,
        "context_capacity": 15200,
        "cost_usd": 0.012,
        "lines_added": 156,
        "lines_removed": 23,
    }


@pytest.fixture
def git_repo(temp_dir: Path) -> Path:
    """Provide a git repository with a commit on branch 'feature/status'."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = temp_dir / "repo"
    repo.mkdir()

    env = os.environ.copy()
    env.update(
        {
            "GIT_AUTHOR_NAME": "Test",
            "GIT_AUTHOR_EMAIL": "test@example.com",
            "GIT_COMMITTER_NAME": "Test",
            "GIT_COMMITTER_EMAIL": "test@example.com",
        }
    )

    def git(*args: str) -> None:
        subprocess.run(["git", *args], cwd=repo, env=env, check=True, capture_output=True)

    git("init", "-q")
    git("checkout", "-q", "-b", "feature/status")
    (repo / "README.md").write_text("hello\n")
    git("add", "README.md")
    git("commit", "-q", "-m", "initial")
    return repo
