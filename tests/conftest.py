"""Shared test fixtures for shipyard tests."""
from pathlib import Path

import pytest

from shipyard.core.config import DeployConfig


class FakeEngine:
    """Container engine double that records every call."""

    executable = "docker"

    def __init__(self, available=True, probe_ok=True, fail_builds=(), fail_pushes=(), raise_builds=()):
        self.available = available
        self.probe_ok = probe_ok
        self.fail_builds = set(fail_builds)
        self.fail_pushes = set(fail_pushes)
        self.raise_builds = set(raise_builds)
        self.builds = []
        self.pushes = []
        self.probes = []

    def is_available(self):
        return self.available

    def build(self, context_dir, image_refs):
        name = Path(context_dir).name
        self.builds.append((name, list(image_refs)))
        if name in self.raise_builds:
            raise OSError("docker daemon went away")
        return name not in self.fail_builds

    def push(self, image_ref):
        self.pushes.append(image_ref)
        repo = image_ref.rsplit(":", 1)[0]
        return repo.rsplit("/", 1)[-1] not in self.fail_pushes

    def probe_registry(self, probe_image):
        self.probes.append(probe_image)
        return self.probe_ok

    def pushed_targets(self):
        names = []
        for ref in self.pushes:
            name = ref.rsplit(":", 1)[0].rsplit("/", 1)[-1]
            if name not in names:
                names.append(name)
        return names


@pytest.fixture
def deploy_config():
    """Config with a real namespace and the default targets."""
    return DeployConfig(namespace="acme", namespace_is_placeholder=False)


@pytest.fixture
def project_root(tmp_path):
    """Project directory with one folder per default target."""
    for name in ("sqlserver", "databricks", "snowflake"):
        target_dir = tmp_path / name
        target_dir.mkdir()
        (target_dir / "Dockerfile").write_text("FROM alpine:3.19\n")
    return tmp_path


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def engine_factory():
    """Build FakeEngine instances with custom failure sets."""
    return FakeEngine
