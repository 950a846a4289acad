"""Backend API client helpers."""

from .client import ApiClientConfig, check_backend, create_client

__all__ = ["ApiClientConfig", "check_backend", "create_client"]
