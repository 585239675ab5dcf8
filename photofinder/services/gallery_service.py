"""
Gallery listing and rendering.

The gallery endpoint answers in one of two shapes:

    {"success": true, "categories": {"<name>": [{filename, downloadUrl|url, viewUrl}, ...]}}
    {"success": true, "photos": {"<key>": {filename, downloadUrl|url, viewUrl}}}

Both are flattened into a plain list of GalleryRecord right at the boundary.
The listing is never cached.
"""

from __future__ import annotations

import logging
from html import escape
from typing import TYPE_CHECKING, Any

from photofinder.exceptions import RemoteApplicationError
from photofinder.models import GalleryRecord


if TYPE_CHECKING:
    from collections import abc

    from yarl import URL

    from photofinder.api import HTTPClient


logger = logging.getLogger("PhotoFinder")

EMPTY_GALLERY_HTML = '<p class="text-gray-500 text-center">No photos found.</p>'
FAILED_GALLERY_HTML = '<p class="text-red-500 text-center">Failed to load gallery.</p>'
ERROR_GALLERY_HTML = '<p class="text-red-500 text-center">Error loading gallery.</p>'

_GALLERY_ITEM_HTML = """\
<div class="gallery-item bg-white rounded-lg shadow-lg overflow-hidden hover:shadow-xl transition">
  <img src="{url}" alt="{filename}" class="w-full h-64 object-cover cursor-pointer" \
data-preview="{url}">
  <div class="p-4">
    <h3 class="font-semibold text-gray-800">{filename}</h3>
    <a href="{view_url}" target="_blank" rel="noopener" \
class="inline-block mt-2 text-cyan-600 hover:text-cyan-800 font-medium">View / Download</a>
  </div>
</div>"""


def _records_from(items: Any, category: str | None) -> abc.Iterator[GalleryRecord]:
    for item in items:
        if isinstance(item, dict):
            yield GalleryRecord(item, category=category)
        else:
            logger.warning(f"Skipping malformed gallery entry: {item!r}")


def parse_gallery_payload(data: Any) -> list[GalleryRecord]:
    """
    Normalize a gallery payload into a list of records.

    `categories` wins when both shapes are present. A payload with neither yields
    an empty list.

    Raises
    ------
    RemoteApplicationError
        If the payload reports `success: false` or isn't an object at all
    """
    if not isinstance(data, dict) or not data.get("success"):
        message = data.get("message") if isinstance(data, dict) else None
        raise RemoteApplicationError(message or "Failed to load gallery")
    records: list[GalleryRecord] = []
    categories = data.get("categories")
    photos = data.get("photos")
    if isinstance(categories, dict):
        for name, items in categories.items():
            if not isinstance(items, list):
                logger.warning(f"Skipping malformed gallery category: {name!r}")
                continue
            records.extend(_records_from(items, name))
    elif isinstance(photos, dict):
        records.extend(_records_from(photos.values(), None))
    return records


async def fetch_gallery_list(http: HTTPClient, url: URL | str) -> list[GalleryRecord]:
    """One-shot fetch of the gallery listing. No caching, no retries."""
    logger.info(f"Loading gallery from: {url}")
    records = parse_gallery_payload(await http.get_json(url))
    logger.info(f"Gallery loaded ({len(records)} photos)")
    return records


def render_gallery(records: abc.Iterable[GalleryRecord]) -> str:
    """Render gallery records as the HTML fragment shown in the gallery grid."""
    items = [
        _GALLERY_ITEM_HTML.format(
            url=escape(record.url),
            filename=escape(record.filename),
            view_url=escape(record.view_url),
        )
        for record in records
    ]
    if not items:
        return EMPTY_GALLERY_HTML
    return "\n".join(items)
