"""
HTTP client for the remote photo endpoints.

Handles HTTP session management and turns transport problems into RemoteFetchError.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections import abc
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import aiohttp
from yarl import URL

from photofinder.config import USER_AGENT
from photofinder.exceptions import RemoteFetchError


if TYPE_CHECKING:
    from photofinder.config.settings import Settings


logger = logging.getLogger("PhotoFinder.http")


class HTTPClient:
    """
    Manages the HTTP session used to talk to the remote endpoints.

    This client provides:
    - Lazy session creation with a shared User-Agent
    - Proxy support
    - JSON GET requests with uniform error reporting

    Requests are never retried, a failure is reported to the caller right away.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the HTTP client.

        Parameters
        ----------
        settings : Settings
            Application settings for proxy configuration
        """
        self.settings = settings
        self._session: aiohttp.ClientSession | None = None

    async def get_session(self) -> aiohttp.ClientSession:
        """
        Get or create the HTTP session.

        Returns
        -------
        aiohttp.ClientSession
            The active HTTP session

        Raises
        ------
        RuntimeError
            If the session is closed
        """
        if (session := self._session) is not None:
            if session.closed:
                raise RuntimeError("Session is closed")
            return session

        connector = aiohttp.TCPConnector(limit=20)
        self._session = aiohttp.ClientSession(
            connector=connector,
            headers={"User-Agent": USER_AGENT},
        )
        return self._session

    @asynccontextmanager
    async def request(
        self, method: str, url: URL | str, **kwargs: Any
    ) -> abc.AsyncIterator[aiohttp.ClientResponse]:
        """
        Make a single HTTP request.

        Parameters
        ----------
        method : str
            HTTP method (GET, POST, etc.)
        url : URL | str
            Request URL
        **kwargs
            Additional arguments passed to aiohttp.ClientSession.request

        Yields
        ------
        aiohttp.ClientResponse
            The HTTP response, with its body already read

        Raises
        ------
        RemoteFetchError
            If the request couldn't be completed at the transport level
        """
        session = await self.get_session()
        method = method.upper()

        if self.settings.proxy and "proxy" not in kwargs:
            kwargs["proxy"] = self.settings.proxy

        logger.debug(f"Request: ({method=}, {url=}, {kwargs=})")
        try:
            response = await session.request(method, url, **kwargs)
            # Pre-read the response to avoid getting errors outside the context manager
            await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.debug(f"Request to {url} failed: {exc!r}")
            raise RemoteFetchError(message=f"Request to {url} failed: {exc}") from exc
        logger.debug(f"Response: {response.status}: {response}")
        try:
            yield response
        finally:
            response.release()

    async def get_json(self, url: URL | str) -> Any:
        """
        GET an URL that answers with JSON, and return the decoded body.

        Raises
        ------
        RemoteFetchError
            On transport failures, non-success statuses, or a body that isn't JSON
        """
        async with self.request("GET", url, headers={"Accept": "application/json"}) as response:
            if not response.ok:
                raise RemoteFetchError(response.status)
            try:
                # Apps Script doesn't always label its JSON as such, and an empty body
                # must fail here rather than decode to None
                return json.loads(await response.read())
            except ValueError as exc:
                raise RemoteFetchError(
                    response.status, "Response body is not valid JSON"
                ) from exc

    async def close(self) -> None:
        """
        Close the HTTP session.

        This should be called during application shutdown.
        """
        if self._session is not None:
            await self._session.close()
            self._session = None
