"""Optional third-party services with a local fallback."""

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
import structlog

from observability import metrics

logger = structlog.get_logger()

DEFAULT_TIMEOUT = 5.0


class ExternalService(ABC):
    """A third-party HTTP capability that may be unconfigured or failing.

    `call` returns None both when no credentials are set and when the
    request fails; callers then use their local heuristic. No retries.
    """

    name: str = "external"

    def __init__(self, api_key: Optional[str], url: str, timeout: float = DEFAULT_TIMEOUT):
        self.api_key = api_key
        self.url = url
        self.client = httpx.AsyncClient(timeout=timeout)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @abstractmethod
    async def call(self, **kwargs) -> Optional[Any]:
        """Invoke the service; None means "use the fallback"."""
        ...

    async def _request_json(self, method: str, **kwargs) -> Optional[Any]:
        """Send an authenticated request to self.url and decode the JSON body."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            with metrics.timer(f"external.{self.name}"):
                response = await self.client.request(method, self.url, headers=headers, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "external.http_error", service=self.name, status=e.response.status_code
            )
        except httpx.RequestError as e:
            logger.warning("external.request_error", service=self.name, error=str(e))
        except ValueError as e:
            logger.warning("external.bad_response", service=self.name, error=str(e))
        metrics.counter(f"external.{self.name}.failed")
        return None

    async def aclose(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
