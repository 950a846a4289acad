"""Kubernetes interaction module."""

from .client import K8sClient
from .minikube import MinikubeClient, parse_docker_env

__all__ = ["K8sClient", "MinikubeClient", "parse_docker_env"]
