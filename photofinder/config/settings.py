from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypedDict

from yarl import URL

from photofinder.config import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    GALLERY_URL,
    LOOKUP_URL,
    SETTINGS_PATH,
)
from photofinder.utils import json_load, json_save


if TYPE_CHECKING:
    from typing import Any as ParsedArgs  # Avoid circular import


class SettingsFile(TypedDict):
    lookup_url: URL
    gallery_url: URL
    proxy: URL
    host: str
    port: int


default_settings: SettingsFile = {
    "lookup_url": LOOKUP_URL,
    "gallery_url": GALLERY_URL,
    "proxy": URL(),
    "host": DEFAULT_HOST,
    "port": DEFAULT_PORT,
}


class Settings:
    # args properties
    logging_level: int
    debug_http: int
    # from settings file
    lookup_url: URL
    gallery_url: URL
    proxy: URL
    host: str
    port: int

    PASSTHROUGH = ("_settings", "_args", "_altered")

    def __init__(self, args: ParsedArgs):
        self._settings: SettingsFile = json_load(SETTINGS_PATH, default_settings)
        self._args: ParsedArgs = args
        self._altered: bool = False

    # default logic of reading settings is to check args first, then the settings file
    def __getattr__(self, name: str, /) -> Any:
        if name in self.PASSTHROUGH:
            # passthrough
            return getattr(super(), name)
        elif hasattr(self._args, name):
            return getattr(self._args, name)
        elif name in self._settings:
            return self._settings[name]  # type: ignore[literal-required]
        return getattr(super(), name)

    def __setattr__(self, name: str, value: Any, /) -> None:
        if name in self.PASSTHROUGH:
            # passthrough
            return super().__setattr__(name, value)
        elif name in self._settings:
            self._settings[name] = value  # type: ignore[literal-required]
            self._altered = True
            return
        raise TypeError(f"{name} is missing a custom setter")

    def __delattr__(self, name: str, /) -> None:
        raise RuntimeError("settings can't be deleted")

    def save(self, *, force: bool = False) -> None:
        if self._altered or force:
            json_save(SETTINGS_PATH, self._settings, sort=True)
