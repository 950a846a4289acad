"""Core deployment logic."""

from .access import HostsFile, build_access_info, useful_commands
from .config import load_config, validate_config
from .deployer import Deployer
from .docker import DockerClient
from .exceptions import CommandError, ConfigError, DeployError, PrerequisiteError
from .prerequisites import check_prerequisites, required_tools

__all__ = [
    "HostsFile",
    "build_access_info",
    "useful_commands",
    "load_config",
    "validate_config",
    "Deployer",
    "DockerClient",
    "CommandError",
    "ConfigError",
    "DeployError",
    "PrerequisiteError",
    "check_prerequisites",
    "required_tools",
]
