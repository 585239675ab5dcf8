from __future__ import annotations

import asyncio
import logging
from time import time
from typing import TYPE_CHECKING, Any

from photofinder.api import HTTPClient
from photofinder.exceptions import PhotoFinderException
from photofinder.services.gallery_service import fetch_gallery_list
from photofinder.services.lookup_cache import LookupTableCache
from photofinder.services.photo_search import search_photo
from photofinder.utils import task_wrapper


if TYPE_CHECKING:
    from photofinder.config.settings import Settings
    from photofinder.models import GalleryRecord, PhotoRecord
    from photofinder.services.lookup_cache import LookupTable


logger = logging.getLogger("PhotoFinder")


class PhotoFinder:
    """
    Ties the settings, the HTTP client and the lookup table cache together.

    One instance is created at startup and handed to the web app.
    """

    def __init__(self, settings: Settings, *, http: HTTPClient | None = None):
        self.settings: Settings = settings
        self._http: HTTPClient = http if http is not None else HTTPClient(settings)
        self.cache: LookupTableCache = LookupTableCache(self._http, settings.lookup_url)
        self._preload_task: asyncio.Task[Any] | None = None

    async def get_table(self) -> LookupTable:
        return await self.cache.get_table()

    async def find_photo(self, code: str) -> PhotoRecord | None:
        """Look a photo up by its code. Returns None if there's no such photo."""
        return await search_photo(self.cache, code)

    async def fetch_gallery(self) -> list[GalleryRecord]:
        return await fetch_gallery_list(self._http, self.settings.gallery_url)

    @task_wrapper(reraise=False)
    async def _preload(self) -> None:
        try:
            await self.cache.get_table()
        except PhotoFinderException as exc:
            # the next search will try again
            logger.warning(f"Failed to preload photo database: {exc}")

    def preload(self) -> asyncio.Task[Any]:
        """
        Warm the lookup table cache in the background.

        Failures are only logged, they never reach the caller.
        """
        if self._preload_task is None or self._preload_task.done():
            self._preload_task = asyncio.create_task(self._preload())
        return self._preload_task

    def status(self) -> dict[str, Any]:
        fetched_at = self.cache.fetched_at
        snapshot = self.cache.snapshot
        return {
            "fetched_at": fetched_at.isoformat() if fetched_at is not None else None,
            "fresh": self.cache.is_fresh(),
            "photo_count": len(snapshot) if snapshot is not None else 0,
        }

    def save(self, *, force: bool = False) -> None:
        """Save the application settings."""
        self.settings.save(force=force)

    async def shutdown(self) -> None:
        start_time = time()
        if self._preload_task is not None:
            self._preload_task.cancel()
            self._preload_task = None
        await self._http.close()
        # wait at least a quarter second + whatever it takes to complete the closing
        # this allows aiohttp to safely close the session
        await asyncio.sleep(max(0.0, start_time + 0.25 - time()))
