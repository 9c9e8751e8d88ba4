"""Remote sync function invocation."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from src.core.config import SyncConfig

logger = logging.getLogger(__name__)


class SyncInvoker(ABC):
    """Base class for anything that can start a remote job sync."""

    @abstractmethod
    async def invoke(self, config_id: str) -> dict[str, Any]:
        """Start a sync for ``config_id`` and return the function's JSON reply.

        Raises on any remote failure.
        """


class HttpSyncInvoker(SyncInvoker):
    """Calls the hosted sync function over HTTP (POST ``{functions_url}/{name}``).

    A client can be injected for tests; otherwise one is created per call.
    """

    def __init__(
        self,
        config: SyncConfig,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._api_key = api_key if api_key is not None else config.api_key()
        self._client = client

    @property
    def url(self) -> str:
        return f"{self._config.functions_url}/{self._config.function_name}"

    async def invoke(self, config_id: str) -> dict[str, Any]:
        headers: dict[str, str] = {}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        logger.info("Invoking %s for config %s", self._config.function_name, config_id)
        if self._client is not None:
            response = await self._client.post(
                self.url, json={"configId": config_id}, headers=headers,
            )
        else:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.url, json={"configId": config_id}, headers=headers,
                )
        response.raise_for_status()

        if not response.content:
            return {}
        return response.json()  # type: ignore[no-any-return]
