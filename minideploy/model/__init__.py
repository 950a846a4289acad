"""Data models for minideploy."""

from .plan import (
    ApplyStep,
    ClusterSettings,
    DeploymentConfig,
    ImageSpec,
    PlanStep,
    WaitStep,
)
from .result import AccessInfo, DeploymentResult, Phase, StepResult

__all__ = [
    "ApplyStep",
    "ClusterSettings",
    "DeploymentConfig",
    "ImageSpec",
    "PlanStep",
    "WaitStep",
    "AccessInfo",
    "DeploymentResult",
    "Phase",
    "StepResult",
]
