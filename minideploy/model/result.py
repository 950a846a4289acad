"""Deployment outcome models."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class Phase(str, Enum):
    """Pipeline phases, in execution order."""

    PREREQUISITES = "prerequisites"
    CLUSTER = "cluster"
    DOCKER_ENV = "docker-env"
    BUILD = "build"
    APPLY = "apply"
    WAIT = "wait"
    ACCESS = "access"


class StepResult(BaseModel):
    """A single executed (or, in a dry run, planned) step."""

    phase: Phase
    description: str
    command: List[str] = Field(default_factory=list)
    executed: bool = True
    success: bool = True
    output: str = ""


class AccessInfo(BaseModel):
    """How to reach the deployed application."""

    ip: str
    hostname: str

    @property
    def url(self) -> str:
        return f"http://{self.hostname}"

    @property
    def hosts_line(self) -> str:
        return f"{self.ip} {self.hostname}"

    @property
    def tee_command(self) -> str:
        return f"echo '{self.hosts_line}' | sudo tee -a /etc/hosts"


class DeploymentResult(BaseModel):
    """Outcome of a deploy run."""

    dry_run: bool = False
    tool_versions: Dict[str, str] = Field(default_factory=dict)
    steps: List[StepResult] = Field(default_factory=list)
    access: Optional[AccessInfo] = None

    def steps_for(self, phase: Phase) -> List[StepResult]:
        return [step for step in self.steps if step.phase == phase]
