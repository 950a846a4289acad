"""Kubernetes client wrapper."""

import json
from pathlib import Path
from typing import List, Optional, Tuple

from ..utils.command import run_command
from ..utils.logger import get_logger

logger = get_logger(__name__)


class K8sClient:
    """Wrapper for kubectl commands."""

    def __init__(self, context: Optional[str] = None, namespace: Optional[str] = None):
        self.context = context
        self.namespace = namespace

    def build_command(self, args: List[str]) -> List[str]:
        """Build kubectl command with context and namespace."""
        cmd = ["kubectl"]

        if self.context:
            cmd.extend(["--context", self.context])

        cmd.extend(args)

        if self.namespace and "--all-namespaces" not in args and "-n" not in args:
            cmd.extend(["-n", self.namespace])

        return cmd

    def execute(self, args: List[str]) -> Tuple[bool, str]:
        """Execute kubectl command and return success status and output."""
        return run_command(self.build_command(args))

    @staticmethod
    def apply_args(manifest: Path) -> List[str]:
        return ["apply", "-f", str(manifest)]

    @staticmethod
    def wait_args(selector: str, resource: str = "pod", condition: str = "ready", timeout: int = 120) -> List[str]:
        return [
            "wait",
            f"--for=condition={condition}",
            resource,
            "-l",
            selector,
            f"--timeout={timeout}s",
        ]

    @staticmethod
    def delete_args(path: Path) -> List[str]:
        return ["delete", "-f", str(path)]

    def apply(self, manifest: Path) -> Tuple[bool, str]:
        """Apply a manifest file (or directory)."""
        return self.execute(self.apply_args(manifest))

    def wait(
        self, selector: str, resource: str = "pod", condition: str = "ready", timeout: int = 120
    ) -> Tuple[bool, str]:
        """Block until resources matching the selector meet the condition."""
        return self.execute(self.wait_args(selector, resource, condition, timeout))

    def delete(self, path: Path) -> Tuple[bool, str]:
        """Delete the resources described by a manifest file or directory."""
        return self.execute(self.delete_args(path))

    def get(self, kinds: List[str]) -> Tuple[bool, str]:
        """List resources of the given kinds in table form."""
        return self.execute(["get", ",".join(kinds)])

    def logs(self, selector: str, tail: Optional[int] = None) -> Tuple[bool, str]:
        """Fetch logs of the pods matching a selector."""
        args = ["logs", "-l", selector]
        if tail is not None:
            args.append(f"--tail={tail}")
        return self.execute(args)

    def get_version(self) -> Optional[str]:
        """Get the kubectl client version string."""
        success, output = self.execute(["version", "--client", "-o", "json"])
        if success:
            try:
                return json.loads(output).get("clientVersion", {}).get("gitVersion")
            except json.JSONDecodeError:
                logger.error("Failed to parse kubectl version output")
                return None
        return None
