"""
Time-bounded cache for the photo lookup table.

The table is fetched from the lookup endpoint and kept in memory for a fixed
freshness window. Once the window elapses, the next caller triggers a refresh.
"""

from __future__ import annotations

import asyncio
import logging
from collections import abc
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from photofinder.config import FRESHNESS_WINDOW
from photofinder.exceptions import RemoteApplicationError
from photofinder.models import PhotoRecord


if TYPE_CHECKING:
    from yarl import URL

    from photofinder.api import HTTPClient


logger = logging.getLogger("PhotoFinder.cache")

LookupTable = abc.Mapping[str, PhotoRecord]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_table(photos: Any) -> LookupTable:
    """
    Turn the `photos` object of the lookup payload into a read-only table,
    keyed by the normalized photo code.
    """
    if not isinstance(photos, dict):
        raise RemoteApplicationError("Malformed photo database payload")
    table: dict[str, PhotoRecord] = {}
    for code, entry in photos.items():
        if not isinstance(entry, dict):
            logger.warning(f"Skipping malformed entry for photo code {code!r}")
            continue
        record = PhotoRecord(str(code), entry)
        if record.code in table:
            logger.warning(f"Duplicate photo code after normalization: {record.code!r}")
        table[record.code] = record
    return MappingProxyType(table)


class LookupTableCache:
    """
    Holds a single snapshot of the lookup table and the time it was fetched at.

    `get_table` serves the snapshot while it's fresh, and fetches a new one otherwise.
    A failed refresh leaves the previous snapshot and its timestamp untouched,
    so the next call tries again. Callers that find the cache stale at the same time
    share a single in-flight fetch.
    """

    def __init__(
        self,
        http: HTTPClient,
        url: URL | str,
        *,
        freshness_window: timedelta = FRESHNESS_WINDOW,
        clock: abc.Callable[[], datetime] = _utcnow,
    ):
        self._http = http
        self._url = url
        self._freshness_window: timedelta = freshness_window
        self._clock = clock
        # snapshot and fetched_at are always set together
        self._state: tuple[LookupTable, datetime] | None = None
        self._pending: asyncio.Task[LookupTable] | None = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(url={self._url}, fetched_at={self.fetched_at})"

    @property
    def snapshot(self) -> LookupTable | None:
        if self._state is None:
            return None
        return self._state[0]

    @property
    def fetched_at(self) -> datetime | None:
        if self._state is None:
            return None
        return self._state[1]

    def is_fresh(self) -> bool:
        if self._state is None:
            return False
        return self._clock() - self._state[1] < self._freshness_window

    async def get_table(self) -> LookupTable:
        """
        Return the current lookup table, fetching it if the snapshot is missing or stale.

        Raises
        ------
        RemoteFetchError
            If the endpoint couldn't be reached or answered with an error status
        RemoteApplicationError
            If the endpoint reported `success: false`
        """
        if self._state is not None and self.is_fresh():
            logger.debug("Using cached photo database")
            return self._state[0]
        if self._pending is None or self._pending.done():
            self._pending = asyncio.create_task(self._refresh())
            self._pending.add_done_callback(self._fetch_done)
        else:
            logger.debug("Joining the photo database fetch already in progress")
        # a cancelled caller shouldn't cancel the fetch for everyone else
        return await asyncio.shield(self._pending)

    def _fetch_done(self, task: asyncio.Task[LookupTable]) -> None:
        if self._pending is task:
            self._pending = None
        if not task.cancelled() and (exc := task.exception()) is not None:
            logger.error(f"Photo database fetch failed: {exc}")

    async def _refresh(self) -> LookupTable:
        now = self._clock()
        logger.info(f"Fetching photo database from: {self._url}")
        data = await self._http.get_json(self._url)
        if not isinstance(data, dict) or not data.get("success"):
            message = data.get("message") if isinstance(data, dict) else None
            raise RemoteApplicationError(message or "Failed to fetch photos")
        table = build_table(data.get("photos"))
        self._state = (table, now)
        logger.info(f"Photo database loaded successfully ({len(table)} photos)")
        return table
