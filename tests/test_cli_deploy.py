"""Tests for the deploy CLI command."""
import pytest
from typer.testing import CliRunner

from shipyard.cli import app
from shipyard.cli_deploy_commands import deploy_app

runner = CliRunner()


@pytest.fixture
def patched_engine(monkeypatch, fake_engine, project_root):
    """Route the CLI's ContainerEngine to the fake and run inside project_root."""
    monkeypatch.chdir(project_root)
    monkeypatch.setenv("DOCKER_USERNAME", "acme")
    monkeypatch.delenv("SHIPYARD_CONFIG", raising=False)
    monkeypatch.delenv("SHIPYARD_MOCK", raising=False)
    monkeypatch.setattr(
        "shipyard.cli_deploy_commands.ContainerEngine",
        lambda mock=False: fake_engine,
    )
    return fake_engine


def test_help_short_flag():
    result = runner.invoke(app, ["deploy", "-h"])
    assert result.exit_code == 0
    assert "--action" in result.output
    assert "--target" in result.output


def test_build_single_target(patched_engine):
    result = runner.invoke(app, ["deploy", "-t", "sqlserver", "-v", "v1.0.0"])

    assert result.exit_code == 0, result.output
    assert patched_engine.builds == [
        ("sqlserver", ["docker.io/acme/sqlserver:v1.0.0", "docker.io/acme/sqlserver:latest"])
    ]
    assert patched_engine.pushes == []
    assert "Deploy Summary" in result.output
    assert "sqlserver" in result.output


def test_failed_build_sets_exit_code(patched_engine):
    patched_engine.fail_builds.add("databricks")

    result = runner.invoke(app, ["deploy", "--action", "all"])

    assert result.exit_code == 1
    assert patched_engine.pushed_targets() == ["sqlserver", "snowflake"]
    assert "failures" in result.output


def test_missing_engine_aborts(patched_engine):
    patched_engine.available = False

    result = runner.invoke(app, ["deploy", "-a", "all"])

    assert result.exit_code == 1
    assert patched_engine.builds == []
    assert "not installed" in result.output


def test_unknown_target_reports_error(patched_engine):
    result = runner.invoke(app, ["deploy", "-t", "oracle"])

    assert result.exit_code == 1
    assert "Unknown target" in result.output


def test_empty_version_rejected_before_build(patched_engine):
    result = runner.invoke(app, ["deploy", "-t", "sqlserver", "-v", ""])

    assert result.exit_code == 1
    assert "Version label must not be empty" in result.output
    assert patched_engine.builds == []


def test_invalid_action_rejected():
    result = runner.invoke(app, ["deploy", "-a", "ship"])
    assert result.exit_code != 0


def test_placeholder_namespace_warns(patched_engine, monkeypatch):
    monkeypatch.delenv("DOCKER_USERNAME", raising=False)

    result = runner.invoke(app, ["deploy", "-t", "snowflake"])

    assert result.exit_code == 0, result.output
    assert "DOCKER_USERNAME is not set" in result.output
    assert patched_engine.builds[0][1] == ["docker.io/your-dockerhub-username/snowflake:latest"]


def test_standalone_app_dry_run(project_root, monkeypatch):
    monkeypatch.chdir(project_root)
    monkeypatch.setenv("DOCKER_USERNAME", "acme")
    monkeypatch.delenv("SHIPYARD_CONFIG", raising=False)

    result = runner.invoke(deploy_app, ["--dry-run", "-a", "all", "-t", "databricks"])

    assert result.exit_code == 0, result.output
    assert "MOCK: Would build" in result.output
    assert "MOCK: Would push" in result.output
