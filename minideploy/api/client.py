"""HTTP client configuration for reaching the backend through the ingress."""

import os
from typing import Dict, Mapping, Optional, Tuple
from urllib.parse import urlsplit

import httpx
from pydantic import BaseModel, Field

from ..utils.logger import get_logger

logger = get_logger(__name__)

API_URL_ENV_VAR = "REACT_APP_API_URL"
DEFAULT_API_BASE_URL = "/api"


class ApiClientConfig(BaseModel):
    """Base URL and default headers used by the frontend's API client.

    The base URL is relative by default so browser requests go to the same
    origin (the ingress), which routes ``/api/*`` to the backend service.
    """

    base_url: str = DEFAULT_API_BASE_URL
    headers: Dict[str, str] = Field(default_factory=lambda: {"Content-type": "application/json"})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ApiClientConfig":
        """Build the config, honoring REACT_APP_API_URL when set."""
        environ = os.environ if environ is None else environ
        base_url = environ.get(API_URL_ENV_VAR)
        if base_url:
            return cls(base_url=base_url)
        return cls()

    @property
    def is_relative(self) -> bool:
        return not urlsplit(self.base_url).scheme

    def resolve_base_url(self, origin: str) -> str:
        """Resolve a relative base URL against the ingress origin."""
        if not self.is_relative:
            return self.base_url
        return f"{origin.rstrip('/')}/{self.base_url.lstrip('/')}"


def create_client(
    config: ApiClientConfig,
    origin: str,
    timeout: float = 10.0,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Create an httpx client preconfigured like the frontend's API client."""
    return httpx.Client(
        base_url=config.resolve_base_url(origin),
        headers=config.headers,
        timeout=timeout,
        transport=transport,
    )


def check_backend(client: httpx.Client, path: str = "") -> Tuple[bool, str]:
    """GET a backend path through the ingress.

    Any response below 500 counts as reachable: the request made it through
    the ingress to the backend.
    """
    try:
        response = client.get(path)
    except httpx.HTTPError as e:
        logger.error(f"Backend request failed: {e}")
        return False, str(e)

    return response.status_code < 500, f"HTTP {response.status_code} from {response.request.url}"
