"""Docker client for building images."""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..model.plan import ImageSpec
from ..utils.command import run_command
from ..utils.logger import get_logger

logger = get_logger(__name__)


class DockerClient:
    """Client for docker build operations."""

    def __init__(self, project_dir: Optional[Path] = None):
        self.project_dir = project_dir

    @staticmethod
    def build_args(image: ImageSpec) -> List[str]:
        return ["build", "-t", image.reference, "-f", image.dockerfile, image.context]

    def build_command(self, args: List[str]) -> List[str]:
        return ["docker"] + args

    def build(self, image: ImageSpec, env: Optional[Dict[str, str]] = None) -> Tuple[bool, str]:
        """Build an image from the project directory.

        ``env`` usually carries the ``minikube docker-env`` variables so the
        image lands in the cluster's daemon instead of the host's.
        """
        logger.info(f"Building image {image.reference}")
        return run_command(self.build_command(self.build_args(image)), env=env, cwd=self.project_dir)

    def get_version(self) -> Optional[str]:
        """Get the docker version string."""
        success, output = run_command(self.build_command(["--version"]))
        return output.strip() if success else None
