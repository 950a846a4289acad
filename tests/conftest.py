"""Test configuration and fixtures."""

import json
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from minideploy.model.plan import DeploymentConfig, default_images, default_steps

DOCKER_ENV_OUTPUT = """export DOCKER_TLS_VERIFY="1"
export DOCKER_HOST="tcp://192.168.49.2:2376"
export DOCKER_CERT_PATH="/home/dev/.minikube/certs"
export MINIKUBE_ACTIVE_DOCKERD="minikube"

# To point your shell to minikube's docker-daemon, run:
# eval $(minikube -p minikube docker-env)
"""

MINIKUBE_IP = "192.168.49.2"


class FakeRunner:
    """Stand-in for subprocess.run that answers like minikube, kubectl and docker."""

    def __init__(self, running: bool = True, fail_on: Optional[List[str]] = None):
        self.running = running
        self.fail_on = fail_on
        self.calls: List[List[str]] = []
        self.kwargs: List[Dict[str, Any]] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        self.kwargs.append(kwargs)

        if self.fail_on and list(cmd[: len(self.fail_on)]) == self.fail_on:
            raise subprocess.CalledProcessError(1, cmd, output="", stderr="error: boom")

        return MagicMock(stdout=self._stdout(cmd), stderr="", returncode=0)

    def _stdout(self, cmd: List[str]) -> str:
        tool, args = cmd[0], cmd[1:]

        if tool == "minikube":
            if args[:1] == ["status"]:
                if not self.running:
                    raise subprocess.CalledProcessError(7, cmd, output="Stopped\n", stderr="")
                return "Running\n"
            if args[:1] == ["docker-env"]:
                return DOCKER_ENV_OUTPUT
            if args[:1] == ["ip"]:
                return f"{MINIKUBE_IP}\n"
            if args[:1] == ["version"]:
                return "v1.32.0\n"
        if tool == "kubectl" and args[:1] == ["version"]:
            return json.dumps({"clientVersion": {"major": "1", "minor": "28", "gitVersion": "v1.28.4"}})
        if tool == "docker" and args == ["--version"]:
            return "Docker version 24.0.7, build afdd53b\n"
        return ""

    def mutating_calls(self) -> List[List[str]]:
        """Calls other than version and status queries."""
        return [
            cmd
            for cmd in self.calls
            if cmd[1:2] not in (["version"], ["status"], ["--version"])
        ]

    def find(self, *prefix: str) -> List[List[str]]:
        return [cmd for cmd in self.calls if cmd[: len(prefix)] == list(prefix)]


def make_project(root: Path) -> Path:
    """Create a project tree holding every file the default plan refers to."""
    for image in default_images():
        (root / image.dockerfile).write_text("FROM node:18-alpine\n")

    (root / "k8s").mkdir(exist_ok=True)
    for step in default_steps():
        manifest = getattr(step, "manifest", None)
        if manifest:
            (root / manifest).write_text("apiVersion: v1\nkind: ConfigMap\n")
    return root


@pytest.fixture
def project_dir(tmp_path):
    """Project directory with Dockerfiles and k8s manifests."""
    return make_project(tmp_path)


@pytest.fixture
def deployment_config(project_dir):
    """Default configuration rooted at the sample project."""
    return DeploymentConfig(project_dir=project_dir)


@pytest.fixture
def fake_run():
    """Fake subprocess runner with a running cluster."""
    return FakeRunner()
