from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx


@dataclass
class ApiConfig:
    base_url: str
    timeout: float = 30.0


class ApiConnection:
    """HTTP client factory for the attendance API.

    Note: We create short-lived clients per operation. Flask runs each async
    view in its own event loop, so a shared AsyncClient would outlive its loop.
    """

    def __init__(self, config: ApiConfig, *, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._config = config
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._config.base_url.rstrip("/")

    def connect(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=float(self._config.timeout),
            transport=self._transport,
        )
