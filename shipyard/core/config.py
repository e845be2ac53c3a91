"""shipyard runtime configuration and settings."""
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

import yaml

from shipyard.core.errors import ShipyardError
from shipyard.core.logger import get_logger

logger = get_logger(__name__)

DEFAULT_REGISTRY = "docker.io"
PLACEHOLDER_NAMESPACE = "your-dockerhub-username"
DEFAULT_TARGETS = ("sqlserver", "databricks", "snowflake")
DEFAULT_PROBE_IMAGE = "hello-world"
DEFAULT_CONFIG_FILE = "shipyard.yml"

NAMESPACE_ENV = "DOCKER_USERNAME"
REGISTRY_ENV = "SHIPYARD_REGISTRY"
PROBE_IMAGE_ENV = "SHIPYARD_PROBE_IMAGE"
CONFIG_FILE_ENV = "SHIPYARD_CONFIG"
MOCK_ENV = "SHIPYARD_MOCK"


@dataclass(frozen=True)
class DeployConfig:
    """Runtime configuration for deploy runs.

    Built once at startup and passed into the orchestrator; nothing else
    reads the environment.

    Attributes:
        registry: Registry host images are published to (default: docker.io)
        namespace: Path prefix under the registry (from DOCKER_USERNAME)
        targets: Known sub-project names, in build order
        probe_image: Image pulled to check registry reachability
        namespace_is_placeholder: True when DOCKER_USERNAME was not set
    """

    registry: str = DEFAULT_REGISTRY
    namespace: str = PLACEHOLDER_NAMESPACE
    targets: Tuple[str, ...] = DEFAULT_TARGETS
    probe_image: str = DEFAULT_PROBE_IMAGE
    namespace_is_placeholder: bool = field(default=True, compare=False)

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        config_file: Optional[str] = None,
    ) -> "DeployConfig":
        """Create config from an optional YAML file and environment variables.

        Environment variables:
            DOCKER_USERNAME: Registry namespace (placeholder when unset)
            SHIPYARD_REGISTRY: Registry host
            SHIPYARD_PROBE_IMAGE: Image used for the registry probe
            SHIPYARD_CONFIG: Path to a YAML file with the same keys

        Environment values win over file values.
        """
        env = os.environ if env is None else env

        path = config_file or env.get(CONFIG_FILE_ENV)
        if path:
            file_values = load_config_file(Path(path), required=True)
        else:
            file_values = load_config_file(Path(DEFAULT_CONFIG_FILE), required=False)

        config = cls()
        if file_values:
            config = replace(config, **file_values)

        registry = env.get(REGISTRY_ENV) or config.registry
        probe_image = env.get(PROBE_IMAGE_ENV) or config.probe_image

        namespace = env.get(NAMESPACE_ENV)
        if namespace:
            is_placeholder = False
        elif "namespace" in file_values:
            namespace = config.namespace
            is_placeholder = False
        else:
            namespace = PLACEHOLDER_NAMESPACE
            is_placeholder = True

        return replace(
            config,
            registry=registry,
            namespace=namespace,
            probe_image=probe_image,
            namespace_is_placeholder=is_placeholder,
        )

    def image_repository(self, target: str) -> str:
        """Return `<registry>/<namespace>/<target>` without a tag."""
        return f"{self.registry}/{self.namespace}/{target}"


def load_config_file(path: Path, required: bool = False) -> Dict[str, object]:
    """Read overrides from a YAML config file.

    Recognised keys: registry, namespace, probe_image, targets (list).

    Raises:
        ShipyardError: If the file is required but missing, or malformed
    """
    if not path.exists():
        if required:
            raise ShipyardError(f"Config file not found: {path}")
        return {}

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ShipyardError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ShipyardError(f"{path} must contain a mapping at the top level")

    values: Dict[str, object] = {}
    for key in ("registry", "namespace", "probe_image"):
        if key in data:
            value = data[key]
            if not isinstance(value, str) or not value.strip():
                raise ShipyardError(f"'{key}' in {path} must be a non-empty string")
            values[key] = value.strip()

    if "targets" in data:
        targets = data["targets"]
        if (
            not isinstance(targets, list)
            or not targets
            or not all(isinstance(t, str) and t.strip() for t in targets)
        ):
            raise ShipyardError(f"'targets' in {path} must be a non-empty list of names")
        values["targets"] = tuple(t.strip() for t in targets)

    logger.debug(f"Loaded config overrides from {path}: {sorted(values)}")
    return values


def is_mock(env: Optional[Mapping[str, str]] = None) -> bool:
    """Return True when commands should only be logged, not executed."""
    env = os.environ if env is None else env
    return env.get(MOCK_ENV) == "1"
