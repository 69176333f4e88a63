"""
Pytest configuration and shared fixtures for modbuild tests.
"""

import json
import shutil
import subprocess

import pytest

VERSION_VARIABLES = ("KSP_VERSION", "KSP_VERSION_MIN", "KSP_VERSION_MAX", "MOD_VERSION")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove the version variables from the process environment."""
    for name in VERSION_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def work_dir(tmp_path, clean_env):
    """Run the test inside an empty working directory."""
    clean_env.chdir(tmp_path)
    # Keep git from finding a repository above the test directory
    clean_env.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    return tmp_path


@pytest.fixture
def write_json(work_dir):
    """Write a KSP_VERSION.json style file into the working directory."""

    def _write(data, name="KSP_VERSION.json"):
        path = work_dir / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


def _git(*args, cwd):
    result = subprocess.run(
        ["git", *args], cwd=cwd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True, check=False
    )
    if result.returncode != 0:
        raise RuntimeError(f"git {' '.join(args)} failed: {result.stderr}")
    return result.stdout.strip()


@pytest.fixture
def git_repo(work_dir):
    """Factory building a Git repository in the working directory.

    Returns a helper that runs git in the repository.
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    def _make(commits=1, tag=None, commits_since_tag=0):
        _git("init", "-q", cwd=work_dir)
        _git("config", "user.name", "test", cwd=work_dir)
        _git("config", "user.email", "test@example.com", cwd=work_dir)
        _git("config", "commit.gpgsign", "false", cwd=work_dir)
        _git("config", "tag.gpgsign", "false", cwd=work_dir)
        for index in range(commits):
            _git("commit", "-q", "--allow-empty", "-m", f"commit {index}", cwd=work_dir)
        if tag is not None:
            _git("tag", tag, cwd=work_dir)
        for index in range(commits_since_tag):
            _git("commit", "-q", "--allow-empty", "-m", f"later commit {index}", cwd=work_dir)
        return lambda *args: _git(*args, cwd=work_dir)

    return _make
