"""Deployment plan models."""

from pathlib import Path
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field


class ImageSpec(BaseModel):
    """Container image to build before the manifests are applied."""

    name: str
    tag: str = "latest"
    dockerfile: str
    context: str = "."

    class Config:
        extra = "forbid"

    @property
    def reference(self) -> str:
        """Get the image reference (name:tag)."""
        return f"{self.name}:{self.tag}"


class ApplyStep(BaseModel):
    """Apply a single manifest file."""

    action: Literal["apply"] = "apply"
    manifest: str
    message: Optional[str] = None

    class Config:
        extra = "forbid"

    @property
    def description(self) -> str:
        return f"Applied {self.manifest}"


class WaitStep(BaseModel):
    """Block until resources matching a label selector meet a condition."""

    action: Literal["wait"] = "wait"
    selector: str
    resource: str = "pod"
    condition: str = "ready"
    timeout: int = 120
    message: Optional[str] = None

    class Config:
        extra = "forbid"

    @property
    def description(self) -> str:
        return f"{self.resource} -l {self.selector} is {self.condition}"


PlanStep = Union[ApplyStep, WaitStep]


class ClusterSettings(BaseModel):
    """Local cluster start parameters."""

    cpus: int = 2
    memory: int = 4096
    addons: List[str] = Field(default_factory=lambda: ["ingress"])
    profile: Optional[str] = None

    class Config:
        extra = "forbid"


def default_images() -> List[ImageSpec]:
    """Backend and frontend images of the three-tier app."""
    return [
        ImageSpec(name="react-mysql-backend", dockerfile="Dockerfile.backend"),
        ImageSpec(name="react-mysql-frontend", dockerfile="Dockerfile.frontend"),
    ]


def default_steps() -> List[PlanStep]:
    """Database first, then backend, frontend and ingress."""
    return [
        ApplyStep(manifest="k8s/1-mysql-secret.yaml"),
        ApplyStep(manifest="k8s/2-mysql-pv-pvc.yaml"),
        ApplyStep(manifest="k8s/2.5-mysql-init-configmap.yaml"),
        ApplyStep(manifest="k8s/3-mysql-deployment.yaml"),
        ApplyStep(manifest="k8s/4-mysql-service.yaml", message="MySQL resources created"),
        WaitStep(selector="app=mysql", message="MySQL is ready"),
        ApplyStep(manifest="k8s/5-backend-configmap.yaml"),
        ApplyStep(manifest="k8s/6-backend-deployment.yaml"),
        ApplyStep(manifest="k8s/7-backend-service.yaml", message="Backend resources created"),
        ApplyStep(manifest="k8s/8-frontend-deployment.yaml"),
        ApplyStep(manifest="k8s/9-frontend-service.yaml", message="Frontend resources created"),
        ApplyStep(manifest="k8s/10-ingress.yaml", message="Ingress created"),
        WaitStep(selector="app=backend", message="Backend pods are ready"),
        WaitStep(selector="app=frontend", message="Frontend pods are ready"),
    ]


class DeploymentConfig(BaseModel):
    """Everything needed to deploy the stack."""

    project_dir: Path = Path(".")
    cluster: ClusterSettings = Field(default_factory=ClusterSettings)
    images: List[ImageSpec] = Field(default_factory=default_images)
    steps: List[PlanStep] = Field(default_factory=default_steps)
    hostname: str = "myapp.local"
    hosts_file: Path = Path("/etc/hosts")
    manifest_dir: str = "k8s"

    class Config:
        extra = "forbid"

    @property
    def apply_steps(self) -> List[ApplyStep]:
        return [step for step in self.steps if isinstance(step, ApplyStep)]

    @property
    def wait_steps(self) -> List[WaitStep]:
        return [step for step in self.steps if isinstance(step, WaitStep)]

    def resolve(self, relative: str) -> Path:
        """Resolve a plan path against the project directory."""
        path = Path(relative)
        if path.is_absolute():
            return path
        return self.project_dir / path
