"""Tests for the cms-publish command line."""

import pytest
from click.testing import CliRunner

from cms_publish.cli.main import main


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, content_dir, *args):
    return runner.invoke(main, ["--repo", str(content_dir), *args])


def test_init_creates_repository(runner, content_dir):
    """Test that init prepares the content repository."""
    result = invoke(runner, content_dir, "init")

    assert result.exit_code == 0
    assert "Git repository ready" in result.output
    assert (content_dir / ".git").exists()


def test_publish(runner, content_dir):
    """Test publishing through the CLI without a remote."""
    result = invoke(runner, content_dir, "publish", "-m", "Update hero", "--author", "a@x.com")

    assert result.exit_code == 0
    assert "Committed locally" in result.output
    assert "Update hero" in result.output


def test_publish_requires_message(runner, content_dir):
    """Test that a blank message is a usage error."""
    result = invoke(runner, content_dir, "publish", "-m", " ", "--author", "a@x.com")

    assert result.exit_code == 2
    assert "Missing required fields: message" in result.output


def test_publish_twice_reports_no_changes(runner, content_dir):
    """Test that a second publish has nothing to commit."""
    invoke(runner, content_dir, "publish", "-m", "Initial content", "--author", "a@x.com")

    result = invoke(runner, content_dir, "publish", "-m", "Again", "--author", "a@x.com")

    assert result.exit_code == 0
    assert "No changes to commit" in result.output


def test_rollback_without_commits_fails(runner, content_dir):
    """Test that rollback on an empty history exits non-zero."""
    result = invoke(runner, content_dir, "rollback")

    assert result.exit_code == 1
    assert "No commits to rollback" in result.output


def test_rollback(runner, content_dir):
    """Test rolling back the latest publish."""
    invoke(runner, content_dir, "publish", "-m", "Initial content", "--author", "a@x.com")

    result = invoke(runner, content_dir, "rollback")

    assert result.exit_code == 0
    assert "Successfully rolled back commit: Initial content" in result.output


def test_log(runner, content_dir):
    """Test showing recent commits."""
    invoke(runner, content_dir, "publish", "-m", "Initial content", "--author", "a@x.com")

    result = invoke(runner, content_dir, "log", "--limit", "5")

    assert result.exit_code == 0
    assert "Initial content" in result.output


def test_log_without_commits(runner, content_dir):
    """Test the log of a fresh repository."""
    invoke(runner, content_dir, "init")

    result = invoke(runner, content_dir, "log")

    assert result.exit_code == 0
    assert "No commits yet" in result.output


def test_status(runner, content_dir):
    """Test showing clean and dirty working trees."""
    invoke(runner, content_dir, "publish", "-m", "Initial content", "--author", "a@x.com")

    result = invoke(runner, content_dir, "status")
    assert result.exit_code == 0
    assert "Working tree clean" in result.output

    (content_dir / "public" / "hero.html").write_text("<h1>Draft</h1>\n")
    result = invoke(runner, content_dir, "status")
    assert result.exit_code == 0
    assert "modified" in result.output
    assert "hero.html" in result.output
