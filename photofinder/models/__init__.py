"""Domain models for photo lookups and the gallery."""

from photofinder.models.photo import GalleryRecord, PhotoRecord, normalize_code


__all__ = [
    "PhotoRecord",
    "GalleryRecord",
    "normalize_code",
]
