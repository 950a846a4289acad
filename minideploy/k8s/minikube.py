"""Minikube client wrapper."""

import re
from typing import Dict, List, Optional, Tuple

from ..utils.command import run_command
from ..utils.logger import get_logger

logger = get_logger(__name__)

_EXPORT_LINE = re.compile(r'^export\s+([A-Za-z_][A-Za-z0-9_]*)="(.*)"$')


def parse_docker_env(output: str) -> Dict[str, str]:
    """Parse ``minikube docker-env --shell bash`` output into a mapping."""
    env = {}
    for line in output.splitlines():
        match = _EXPORT_LINE.match(line.strip())
        if match:
            env[match.group(1)] = match.group(2)
    return env


class MinikubeClient:
    """Wrapper for minikube commands."""

    STATUS_ARGS = ["status", "--format", "{{.Host}}"]
    DOCKER_ENV_ARGS = ["docker-env", "--shell", "bash"]
    IP_ARGS = ["ip"]

    def __init__(self, profile: Optional[str] = None):
        self.profile = profile

    def build_command(self, args: List[str]) -> List[str]:
        """Build minikube command with the profile flag."""
        cmd = ["minikube"] + args
        if self.profile:
            cmd.extend(["-p", self.profile])
        return cmd

    def execute(self, args: List[str], log_errors: bool = True) -> Tuple[bool, str]:
        """Execute minikube command and return success status and output."""
        return run_command(self.build_command(args), log_errors=log_errors)

    @staticmethod
    def start_args(cpus: int, memory: int) -> List[str]:
        return ["start", f"--cpus={cpus}", f"--memory={memory}"]

    @staticmethod
    def addon_args(name: str) -> List[str]:
        return ["addons", "enable", name]

    def is_running(self) -> bool:
        """Check whether the cluster host is running."""
        # minikube status exits non-zero when the cluster is stopped
        success, output = self.execute(self.STATUS_ARGS, log_errors=False)
        return success and "Running" in output

    def start(self, cpus: int, memory: int) -> Tuple[bool, str]:
        """Start the cluster."""
        return self.execute(self.start_args(cpus, memory))

    def enable_addon(self, name: str) -> Tuple[bool, str]:
        """Enable a minikube addon."""
        return self.execute(self.addon_args(name))

    def docker_env(self) -> Optional[Dict[str, str]]:
        """Get the environment that points docker at the cluster's daemon."""
        success, output = self.execute(self.DOCKER_ENV_ARGS)
        if not success:
            return None
        env = parse_docker_env(output)
        if not env:
            logger.warning("minikube docker-env returned no variables")
        return env

    def ip(self) -> Optional[str]:
        """Get the cluster IP address."""
        success, output = self.execute(self.IP_ARGS)
        if success and output.strip():
            return output.strip()
        return None

    def get_version(self) -> Optional[str]:
        """Get the minikube version string."""
        success, output = self.execute(["version", "--short"])
        return output.strip() if success else None
