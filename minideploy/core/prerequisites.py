"""Prerequisite checks for the external tools."""

import shutil
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..k8s import K8sClient, MinikubeClient
from ..utils.logger import get_logger
from .docker import DockerClient
from .exceptions import PrerequisiteError

logger = get_logger(__name__)


@dataclass
class Prerequisite:
    """An external binary the deploy pipeline shells out to."""

    binary: str
    install_url: str
    version: Callable[[], Optional[str]]


def required_tools(
    minikube: Optional[MinikubeClient] = None,
    kubectl: Optional[K8sClient] = None,
    docker: Optional[DockerClient] = None,
) -> List[Prerequisite]:
    """minikube, kubectl and docker, in the order they are checked."""
    minikube = minikube or MinikubeClient()
    kubectl = kubectl or K8sClient()
    docker = docker or DockerClient()

    return [
        Prerequisite("minikube", "https://minikube.sigs.k8s.io/docs/start/", minikube.get_version),
        Prerequisite("kubectl", "https://kubernetes.io/docs/tasks/tools/", kubectl.get_version),
        Prerequisite("docker", "https://docs.docker.com/get-docker/", docker.get_version),
    ]


def check_prerequisites(tools: List[Prerequisite]) -> Dict[str, str]:
    """Verify every tool is on PATH and collect their versions.

    Raises PrerequisiteError for the first missing binary. A binary that is
    present but fails to report its version only produces a warning.
    """
    versions = {}

    for tool in tools:
        if shutil.which(tool.binary) is None:
            raise PrerequisiteError(tool.binary, tool.install_url)

        version = tool.version()
        if version is None:
            logger.warning(f"{tool.binary} found but its version could not be determined")
            version = "unknown"

        logger.info(f"{tool.binary} found: {version}")
        versions[tool.binary] = version

    return versions
