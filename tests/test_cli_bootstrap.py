"""Tests for the bootstrap CLI command."""
from pathlib import Path
from types import SimpleNamespace

from typer.testing import CliRunner

from shipyard.cli import app

runner = CliRunner()


def install_fake_git(monkeypatch):
    calls = []

    def fake_run(args, cwd=None, capture_output=False, check=False, text=False):
        calls.append(list(args))
        if list(args[:2]) == ["git", "init"] and cwd:
            (Path(cwd) / ".git").mkdir(exist_ok=True)
        return SimpleNamespace(returncode=0, stdout="", stderr="")

    monkeypatch.setattr("shipyard.services.git_manager.subprocess.run", fake_run)
    return calls


def test_bootstrap_with_prompts(tmp_path, monkeypatch):
    calls = install_fake_git(monkeypatch)

    result = runner.invoke(
        app,
        ["bootstrap", "--path", str(tmp_path), "-r", "images"],
        input="alice\ny\n",
    )

    assert result.exit_code == 0, result.output
    assert ["git", "remote", "add", "origin", "https://github.com/alice/images.git"] in calls
    assert "git push -u origin main" in result.output
    assert (tmp_path / ".git").exists()


def test_bootstrap_declined(tmp_path, monkeypatch):
    calls = install_fake_git(monkeypatch)

    result = runner.invoke(
        app,
        ["bootstrap", "--path", str(tmp_path), "-u", "alice"],
        input="n\n",
    )

    assert result.exit_code == 0
    assert "no changes made" in result.output
    assert calls == [["git", "--version"]]


def test_bootstrap_empty_username_fails(tmp_path, monkeypatch):
    install_fake_git(monkeypatch)

    result = runner.invoke(
        app,
        ["bootstrap", "--path", str(tmp_path), "--yes"],
        input="\n",
    )

    assert result.exit_code == 1
    assert "username" in result.output


def test_bootstrap_existing_repo(tmp_path, monkeypatch):
    (tmp_path / ".git").mkdir()
    calls = install_fake_git(monkeypatch)

    result = runner.invoke(
        app,
        ["bootstrap", "--path", str(tmp_path), "-u", "alice", "-y"],
    )

    assert result.exit_code == 0, result.output
    assert ["git", "init"] not in calls
    assert "already exists" in result.output


def test_bootstrap_dry_run_skips_confirmation(tmp_path, monkeypatch):
    calls = install_fake_git(monkeypatch)

    result = runner.invoke(
        app,
        ["bootstrap", "--path", str(tmp_path), "-u", "alice", "--dry-run"],
        input="",
    )

    assert result.exit_code == 0, result.output
    assert "[y/N]" not in result.output
    assert calls == []
    assert not (tmp_path / ".git").exists()


def test_bootstrap_help():
    result = runner.invoke(app, ["bootstrap", "-h"])
    assert result.exit_code == 0
    assert "--repo-name" in result.output
