from __future__ import annotations

import hashlib
import json
import os
from typing import Any, Optional


def _base_dir() -> str:
    base = os.environ.get("GITBOOK_CACHE_DIR")
    if not base:
        base = os.path.join(os.getcwd(), ".cache", "gitbook_books")
    os.makedirs(base, exist_ok=True)
    return base


def _key(url: str) -> str:
    return hashlib.sha1(url.encode("utf-8")).hexdigest()


def _path(kind: str, url: str, ext: str) -> str:
    k = _key(url)
    d = os.path.join(_base_dir(), kind, k[:2])
    os.makedirs(d, exist_ok=True)
    return os.path.join(d, f"{k}.{ext}")


def get_text(kind: str, url: str) -> Optional[str]:
    path = _path(kind, url, "txt")
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return fh.read()
    except OSError:
        return None


def put_text(kind: str, url: str, text: str) -> None:
    try:
        with open(_path(kind, url, "txt"), "w", encoding="utf-8") as fh:
            fh.write(text)
    except OSError:
        # Best-effort cache; ignore write errors
        return


def get_json(kind: str, url: str) -> Optional[Any]:
    path = _path(kind, url, "json")
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, ValueError):
        return None


def put_json(kind: str, url: str, value: Any) -> None:
    try:
        with open(_path(kind, url, "json"), "w", encoding="utf-8") as fh:
            json.dump(value, fh, ensure_ascii=False)
    except OSError:
        return
