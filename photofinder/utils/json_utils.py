"""Reading and writing the settings file."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeVar, cast

from yarl import URL

from photofinder.config import JsonType


_JSON_T = TypeVar("_JSON_T", bound=Mapping[str, Any])


def _encode_url(obj: Any) -> JsonType:
    # URLs are stored tagged, so they load back as URL and not as str
    if isinstance(obj, URL):
        return {"__type": "URL", "data": str(obj)}
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _decode_url(obj: JsonType) -> Any:
    if obj.get("__type") == "URL" and isinstance(obj.get("data"), str):
        return URL(obj["data"])
    return obj


def merge_json(obj: JsonType, template: Mapping[str, Any]) -> JsonType:
    """
    Return the keys of `template`, taking values from `obj` where they exist
    and have the same type as the template's. Everything else comes from the template.
    """
    return {
        key: obj[key] if key in obj and type(obj[key]) is type(default) else default
        for key, default in template.items()
    }


def json_load(path: Path, defaults: _JSON_T) -> _JSON_T:
    """Load the JSON object at `path` merged over `defaults`, or the defaults if it's missing."""
    if not path.exists():
        return cast(_JSON_T, dict(defaults))
    with open(path, encoding="utf8") as file:
        loaded = json.load(file, object_hook=_decode_url)
    if not isinstance(loaded, dict):
        loaded = {}
    return cast(_JSON_T, merge_json(loaded, defaults))


def json_save(path: Path, contents: Mapping[str, Any], *, sort: bool = False) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf8") as file:
        json.dump(contents, file, default=_encode_url, sort_keys=sort, indent=4)
