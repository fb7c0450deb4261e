"""Shared fixtures for dephealth tests."""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import httpx
import pytest

from dephealth.core.config import Settings
from dephealth.engines.outdated_resolver.pypi_client import PyPIClient

MISSING_BIN = "dephealth-test-missing-binary"


@pytest.fixture
def settings() -> Settings:
    """Settings whose npm executable does not exist, so npm steps degrade."""
    return Settings(npm_bin=MISSING_BIN, command_timeout=30.0, clone_timeout=30.0)


@pytest.fixture
def make_pypi() -> Callable[[dict[str, str | int]], PyPIClient]:
    """Build a PyPIClient backed by a mock registry.

    A str value is the latest version; an int is the HTTP status to return.
    Names not in the mapping get a 404.
    """

    def _make(versions: dict[str, str | int]) -> PyPIClient:
        def handler(request: httpx.Request) -> httpx.Response:
            parts = request.url.path.strip("/").split("/")
            name = parts[1] if len(parts) >= 3 else ""
            value = versions.get(name, 404)
            if isinstance(value, int):
                return httpx.Response(value, json={"message": "error"})
            return httpx.Response(200, json={"info": {"name": name, "version": value}})

        return PyPIClient("https://pypi.test", transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def git_repo(tmp_path) -> Callable[[list[tuple[str, datetime]]], Path]:
    """Create a git repository with one empty commit per (author, date) pair."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    def _make(commits: list[tuple[str, datetime]]) -> Path:
        repo = tmp_path / "history"
        repo.mkdir()
        base_env = {
            "PATH": os.environ.get("PATH", ""),
            "HOME": str(tmp_path),
            "GIT_CONFIG_NOSYSTEM": "1",
            "GIT_CONFIG_GLOBAL": os.devnull,
        }
        subprocess.run(["git", "init", "-q"], cwd=repo, env=base_env, check=True, capture_output=True)
        for i, (author, when) in enumerate(commits):
            stamp = when.isoformat()
            env = {
                **base_env,
                "GIT_AUTHOR_NAME": author,
                "GIT_AUTHOR_EMAIL": f"{author.lower()}@example.com",
                "GIT_COMMITTER_NAME": author,
                "GIT_COMMITTER_EMAIL": f"{author.lower()}@example.com",
                "GIT_AUTHOR_DATE": stamp,
                "GIT_COMMITTER_DATE": stamp,
            }
            subprocess.run(
                ["git", "commit", "--allow-empty", "-q", "-m", f"commit {i}"],
                cwd=repo,
                env=env,
                check=True,
                capture_output=True,
            )
        return repo

    return _make
