from __future__ import annotations

import asyncio
import functools
import logging
import socket
from typing import Callable, Protocol

import httpx

logger = logging.getLogger(__name__)


class ReachabilityProbe(Protocol):
    async def __call__(self, name: str) -> bool: ...


class DnsResolutionProbe:
    """Treats a name as reachable when it resolves to at least one address."""

    def __init__(self, port: int = 443, timeout: float = 5.0):
        self.port = port
        self.timeout = timeout

    async def __call__(self, name: str) -> bool:
        loop = asyncio.get_running_loop()
        addresses = await asyncio.wait_for(
            loop.run_in_executor(
                None,
                functools.partial(socket.getaddrinfo, name, self.port, socket.AF_UNSPEC, socket.SOCK_STREAM),
            ),
            timeout=self.timeout,
        )
        return bool(addresses)


class HttpHeadProbe:
    """Treats a name as reachable when a HEAD request gets a non-5xx answer.

    Transport errors and timeouts count as unreachable rather than raising.
    """

    def __init__(
        self,
        scheme: str = "https",
        path: str = "/",
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.scheme = scheme
        self.path = path if path.startswith("/") else f"/{path}"
        self.timeout = timeout
        self.client = client

    def url_for(self, name: str) -> str:
        return f"{self.scheme}://{name}{self.path}"

    async def __call__(self, name: str) -> bool:
        url = self.url_for(name)
        try:
            if self.client is not None:
                response = await self.client.head(url, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.head(url)
        except httpx.HTTPError as exc:
            logger.debug("HEAD %s failed: %s", url, exc)
            return False
        return response.status_code < 500


def blocking_probe(fn: Callable[[str], bool]) -> ReachabilityProbe:
    """Wrap a synchronous probe so it runs in the default executor."""

    async def probe(name: str) -> bool:
        loop = asyncio.get_running_loop()
        return bool(await loop.run_in_executor(None, fn, name))

    return probe
