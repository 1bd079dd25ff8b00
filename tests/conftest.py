"""Test configuration and fixtures."""

from pathlib import Path
from typing import Generator

import pytest
from git import Actor, Repo
from typer.testing import CliRunner


@pytest.fixture
def test_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a repository with branches main, feature-x and bugfix.

    feature-x is checked out, bugfix has a description and an unmerged commit.
    """
    local_path = tmp_path / "local"
    local_path.mkdir()
    repo = Repo.init(local_path)

    # Set up git config
    author = Actor("Test User", "test@example.com")
    with repo.config_writer() as config:
        config.set_value("user", "name", author.name)
        config.set_value("user", "email", author.email)

    # Create initial commit and set up main branch
    readme = local_path / "README.md"
    readme.write_text("# Test Repository")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit", author=author)

    if "main" not in repo.heads:
        repo.create_head("main")
    repo.heads.main.checkout()
    if "master" in repo.heads:
        repo.delete_head("master")

    repo.create_head("feature-x")

    # bugfix gets a commit that main does not have
    repo.create_head("bugfix").checkout()
    fix = local_path / "fix.txt"
    fix.write_text("fix")
    repo.index.add(["fix.txt"])
    repo.index.commit("Add fix", author=author)

    with repo.config_writer() as config:
        config.set_value('branch "bugfix"', "description", "Fix the login redirect")

    repo.heads["feature-x"].checkout()

    yield local_path


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()
