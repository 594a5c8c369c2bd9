from __future__ import annotations

import json
import os
from typing import Any, Dict

from .exceptions import ManifestError, NotABookExport
from .models import AssetRecord, PageNode, RevisionManifest, SpaceMeta, Version

REVISION_FILE = "revision.json"
SPACE_FILE = "space.json"
ASSETS_DIR = "assets"


def _read_json(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as e:
        raise ManifestError(f"{os.path.basename(path)} is not valid JSON: {e}") from e
    except OSError as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e


def parse_page(data: Dict[str, Any]) -> PageNode:
    """Build a PageNode tree from a revision.json page object.

    `uID`, `path` and `pages` are optional in exports; absent values become
    None, "" and an empty tuple respectively.
    """
    if not isinstance(data, dict):
        raise ManifestError(f"Page entry must be an object, got {type(data).__name__}")
    children = data.get("pages") or []
    return PageNode(
        title=data.get("title") or "",
        kind=data.get("kind") or "",
        uid=data.get("uID"),
        path=data.get("path") or "",
        pages=tuple(parse_page(c) for c in children),
    )


def parse_revision(data: Dict[str, Any]) -> RevisionManifest:
    if not isinstance(data, dict):
        raise ManifestError("revision.json must contain an object")
    versions: Dict[str, Version] = {}
    for vid, v in (data.get("versions") or {}).items():
        page = v.get("page") if isinstance(v, dict) else None
        if page is None:
            raise ManifestError(f"Version {vid!r} has no root page")
        versions[vid] = Version(title=v.get("title") or "", page=parse_page(page))
    assets: Dict[str, AssetRecord] = {}
    for aid, a in (data.get("assets") or {}).items():
        try:
            assets[aid] = AssetRecord(
                uid=a.get("uid") or aid,
                name=a["name"],
                download_url=a.get("downloadURL") or "",
            )
        except (KeyError, AttributeError) as e:
            raise ManifestError(f"Asset {aid!r} is missing a name") from e
    return RevisionManifest(
        primary_version_id=data.get("primaryVersionID") or "",
        versions=versions,
        assets=assets,
    )


def is_book_export(export_dir: str) -> bool:
    return os.path.isfile(os.path.join(export_dir, REVISION_FILE))


def load_revision(export_dir: str) -> RevisionManifest:
    """Load revision.json from an export directory."""
    if not is_book_export(export_dir):
        raise NotABookExport(f"{export_dir} is not a book export (missing {REVISION_FILE})")
    return parse_revision(_read_json(os.path.join(export_dir, REVISION_FILE)))


def load_space(export_dir: str) -> SpaceMeta:
    """Load the book title from space.json, falling back to the directory name."""
    path = os.path.join(export_dir, SPACE_FILE)
    if not os.path.isfile(path):
        return SpaceMeta(name=os.path.basename(os.path.normpath(export_dir)))
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ManifestError("space.json must contain an object")
    return SpaceMeta(name=data.get("name") or "")
