"""Tests for shared helpers: references, workspaces, subprocesses, settings."""

from __future__ import annotations

import sys
from unittest.mock import patch

import pytest

from dephealth.core.config import Settings
from dephealth.core.github import (
    is_github_reference,
    normalize_github_reference,
    parse_repo_reference,
)
from dephealth.core.process import CommandError, run_command
from dephealth.core.workspace import WORKSPACE_PREFIX, EphemeralWorkspace, ephemeral_workspace
from dephealth.exceptions import InvalidRepositoryReference


# ── GitHub references ────────────────────────────────────────────────────


class TestGithubReference:
    @pytest.mark.parametrize(
        "location",
        [
            "https://github.com/expressjs/express",
            "http://github.com/expressjs/express",
            "github.com/expressjs/express",
            "https://github.com/expressjs/express.git",
            "https://github.com/expressjs/express/",
            "https://github.com/expressjs/express/tree/master",
        ],
    )
    def test_parse(self, location):
        assert is_github_reference(location)
        assert parse_repo_reference(location) == ("expressjs", "express")

    @pytest.mark.parametrize(
        "location",
        ["https://github.com/", "https://github.com/owner", "github.com//repo", "https://gitlab.com/a/b"],
    )
    def test_parse_invalid(self, location):
        with pytest.raises(InvalidRepositoryReference, match="Invalid GitHub URL format"):
            parse_repo_reference(location)

    def test_local_paths_are_not_references(self):
        assert not is_github_reference("/home/me/project")
        assert not is_github_reference("./github.com/a/b")

    def test_normalize(self):
        assert normalize_github_reference("github.com/a/b") == "https://github.com/a/b"
        assert normalize_github_reference("https://github.com/a/b") == "https://github.com/a/b"


# ── Workspace ────────────────────────────────────────────────────────────


class TestEphemeralWorkspace:
    @pytest.mark.asyncio
    async def test_released_on_exception(self, tmp_path):
        with pytest.raises(RuntimeError):
            async with ephemeral_workspace(tmp_path) as workdir:
                (workdir / "repo").mkdir()
                raise RuntimeError("clone exploded")
        assert workdir.name.startswith(WORKSPACE_PREFIX)
        assert not workdir.exists()

    @pytest.mark.asyncio
    async def test_unique_paths(self, tmp_path):
        async with ephemeral_workspace(tmp_path) as a, ephemeral_workspace(tmp_path) as b:
            assert a != b

    def test_release_is_idempotent(self, tmp_path):
        workspace = EphemeralWorkspace(tmp_path)
        workspace.release()
        workspace.release()
        assert workspace.released
        assert not workspace.path.exists()

    def test_cleanup_failure_does_not_raise(self, tmp_path):
        workspace = EphemeralWorkspace(tmp_path)
        with patch("dephealth.core.workspace.shutil.rmtree", side_effect=OSError("device busy")):
            workspace.release()
        assert workspace.released
        workspace.path.rmdir()


# ── Subprocess ───────────────────────────────────────────────────────────


class TestRunCommand:
    @pytest.mark.asyncio
    async def test_captures_output_and_exit_code(self, tmp_path):
        result = await run_command(
            [sys.executable, "-c", "import sys; print('hello'); sys.exit(3)"], cwd=tmp_path
        )
        assert result.returncode == 3
        assert result.ok is False
        assert result.stdout.strip() == "hello"

    @pytest.mark.asyncio
    async def test_missing_executable(self):
        with pytest.raises(CommandError, match="cannot run"):
            await run_command(["dephealth-test-missing-binary", "--version"])

    @pytest.mark.asyncio
    async def test_timeout(self):
        with pytest.raises(CommandError, match="timed out"):
            await run_command([sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.5)


# ── Settings ─────────────────────────────────────────────────────────────


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("DEPHEALTH_PYPI_URL", "DEPHEALTH_HTTP_TIMEOUT", "DEPHEALTH_CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.pypi_url == "https://pypi.org"
        assert settings.http_timeout == 10.0
        assert settings.cors_origins == ("http://localhost:3000",)

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("DEPHEALTH_PYPI_URL", "https://mirror.example/")
        monkeypatch.setenv("DEPHEALTH_LOOKUP_CONCURRENCY", "4")
        monkeypatch.setenv("DEPHEALTH_NPM_BIN", "/usr/local/bin/npm")
        monkeypatch.setenv("DEPHEALTH_CORS_ORIGINS", "http://a.test, http://b.test")
        settings = Settings.from_env()
        assert settings.pypi_url == "https://mirror.example"
        assert settings.lookup_concurrency == 4
        assert settings.npm_bin == "/usr/local/bin/npm"
        assert settings.cors_origins == ("http://a.test", "http://b.test")

    def test_invalid_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("DEPHEALTH_HTTP_TIMEOUT", "soon")
        monkeypatch.setenv("DEPHEALTH_LOOKUP_CONCURRENCY", "0")
        settings = Settings.from_env()
        assert settings.http_timeout == 10.0
        assert settings.lookup_concurrency == 10
