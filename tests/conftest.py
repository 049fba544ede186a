"""Pytest configuration and fixtures"""

import tempfile
from pathlib import Path

import pytest

from agentc.config import load_config

CORE_PRINCIPLES = """## 5 Core Principles

1. Read before you write.
2. Prefer small, reviewable changes.
"""

INVESTIGATION = """## Investigation Requirement

Open every file you reference.
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def isolated_home(monkeypatch, temp_dir: Path):
    """Point Path.home() at an empty directory so user config is never read"""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    yield home


@pytest.fixture
def clean_env(monkeypatch):
    """Clear agentc environment variables"""
    for var in ["AGENTC_SOURCE_DIR", "AGENTC_OUTPUT_DIR", "AGENTC_STRICT"]:
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def project_root(temp_dir: Path, isolated_home: Path, clean_env):
    """Create a project with two agents, one skill and shared partials"""
    root = temp_dir / "project"
    src = root / ".claude-src"
    partials = src / "partials"
    agents = src / "agents"
    skills = src / "skills"

    partials.mkdir(parents=True)
    agents.mkdir()
    (skills / "commit-message").mkdir(parents=True)
    (skills / "no-source").mkdir()

    (partials / "core-principles.md").write_text(CORE_PRINCIPLES, encoding="utf-8")
    (partials / "investigation.md").write_text(INVESTIGATION, encoding="utf-8")
    (partials / "boilerplate.md").write_text(
        "@include(core-principles.md)\n@include(investigation.md)\n", encoding="utf-8"
    )

    (agents / "mobx.src.md").write_text(
        "---\n"
        "name: mobx\n"
        "description: MobX state management specialist\n"
        "tools: Read, Grep, Glob\n"
        "model: sonnet\n"
        "---\n\n"
        "# MobX Specialist\n\n"
        "@include(../partials/boilerplate.md)\n",
        encoding="utf-8",
    )
    (agents / "react.src.md").write_text(
        "---\nname: react\ndescription: React specialist\n---\n\n"
        "# React Specialist\n\n@include(../partials/core-principles.md)\n",
        encoding="utf-8",
    )
    (agents / "notes.md").write_text("not a source\n", encoding="utf-8")

    (skills / "commit-message" / "src.md").write_text(
        "# Commit messages\n\n@include(../../partials/investigation.md)\n", encoding="utf-8"
    )

    yield root


@pytest.fixture
def config(project_root: Path):
    """Configuration for the sample project"""
    return load_config(project_root=project_root)
