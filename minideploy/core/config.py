"""Deployment configuration loading and validation."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from ..model.plan import DeploymentConfig
from ..utils.logger import get_logger
from .exceptions import ConfigError

logger = get_logger(__name__)

DEFAULT_CONFIG_NAME = "minideploy.yaml"


def load_config(path: Optional[Path] = None, project_dir: Optional[Path] = None) -> DeploymentConfig:
    """Load the deployment configuration.

    Keys in the YAML file override the built-in defaults; ``images`` and
    ``steps`` replace the default lists as a whole. Without an explicit path a
    ``minideploy.yaml`` in the project directory is picked up when present.
    """
    project_dir = Path(project_dir) if project_dir else Path.cwd()

    if path is None:
        candidate = project_dir / DEFAULT_CONFIG_NAME
        path = candidate if candidate.exists() else None

    data: Dict[str, Any] = {}
    if path is not None:
        data = _read_yaml(Path(path))
        logger.info(f"Loaded configuration from {path}")

    data["project_dir"] = project_dir

    try:
        return DeploymentConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a mapping")
    return data


def validate_config(config: DeploymentConfig) -> None:
    """Check that every manifest and Dockerfile the plan refers to exists."""
    missing = []

    for image in config.images:
        context = config.resolve(image.context)
        # docker resolves -f against the working directory, not the context
        dockerfile = config.resolve(image.dockerfile)
        if not context.is_dir():
            missing.append(f"build context {context}")
        elif not dockerfile.is_file():
            missing.append(f"Dockerfile {dockerfile}")

    for step in config.apply_steps:
        manifest = config.resolve(step.manifest)
        if not manifest.exists():
            missing.append(f"manifest {manifest}")

    if missing:
        raise ConfigError("Missing files:\n" + "\n".join(f"  - {item}" for item in missing))

    if not config.images and not config.steps:
        raise ConfigError("Nothing to deploy: no images and no steps configured")
