from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections import abc

    from photofinder.config.constants import JsonType


def normalize_code(code: str) -> str:
    """
    Normalize a photo code for lookups: surrounding whitespace is dropped
    and the code is uppercased.
    """
    return code.strip().upper()


class PhotoRecord:
    """A single photo entry of the lookup table."""

    def __init__(self, code: str, data: JsonType):
        self.code: str = normalize_code(code)
        download_url = data.get("downloadUrl")
        self.download_url: str | None = str(download_url) if download_url else None
        # keep whatever else the remote sent along
        self.data: abc.Mapping[str, object] = MappingProxyType(dict(data))

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"PhotoRecord({self.code}, {self.download_url})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, self.__class__):
            return self.code == other.code and self.data == other.data
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.code)

    def to_json(self) -> JsonType:
        return {**self.data, "code": self.code, "downloadUrl": self.download_url}


class GalleryRecord:
    """A photo shown in the gallery, flattened from either payload shape."""

    def __init__(self, data: JsonType, *, category: str | None = None):
        self.filename: str = str(data.get("filename") or "")
        # the gallery script used both names for the image link over time
        self.url: str = str(data.get("downloadUrl") or data.get("url") or "")
        self.view_url: str = str(data.get("viewUrl") or "")
        self.category: str | None = category

    def __repr__(self) -> str:
        return f"GalleryRecord({self.filename!r}, category={self.category!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, self.__class__):
            return (
                self.filename == other.filename
                and self.url == other.url
                and self.view_url == other.view_url
                and self.category == other.category
            )
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.filename, self.url, self.view_url, self.category))

    def to_json(self) -> JsonType:
        return {
            "filename": self.filename,
            "url": self.url,
            "viewUrl": self.view_url,
            "category": self.category,
        }
