"""Photo code lookups against the cached table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from photofinder.models import normalize_code


if TYPE_CHECKING:
    from photofinder.models import PhotoRecord
    from photofinder.services.lookup_cache import LookupTable, LookupTableCache


logger = logging.getLogger("PhotoFinder")


def find_photo(table: LookupTable, code: str) -> PhotoRecord | None:
    """
    Look up a user-supplied code in the table.

    Returns None when the code has no entry, a miss isn't an error.
    """
    normalized = normalize_code(code)
    record = table.get(normalized)
    if record is None:
        logger.debug(f"Photo not found: {normalized!r}. Available codes: {sorted(table)}")
    return record


async def search_photo(cache: LookupTableCache, code: str) -> PhotoRecord | None:
    """Fetch the table through the cache (if needed) and look the code up."""
    logger.info(f"Searching for photo code: {normalize_code(code)!r}")
    return find_photo(await cache.get_table(), code)
