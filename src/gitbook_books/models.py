from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class PageNode:
    title: str
    kind: str
    uid: Optional[str] = None  # "uID" in revision.json, absent on some nodes
    path: str = ""  # empty for pure section nodes
    pages: Tuple["PageNode", ...] = ()


@dataclass(frozen=True)
class Version:
    title: str
    page: PageNode


@dataclass(frozen=True)
class AssetRecord:
    uid: str
    name: str  # original filename, not unique across records
    download_url: str


@dataclass(frozen=True)
class RevisionManifest:
    primary_version_id: str
    versions: Mapping[str, Version]
    assets: Mapping[str, AssetRecord]


@dataclass(frozen=True)
class SpaceMeta:
    name: str


@dataclass
class NavNode:
    uid: str
    title: str
    type: str  # "page" | "section"
    path: str
    children: List["NavNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uid": self.uid,
            "title": self.title,
            "type": self.type,
            "path": self.path,
            "children": [c.to_dict() for c in self.children],
        }


@dataclass
class EmbedInfo:
    page_title: str = ""
    page_description: str = ""
    page_icon: str = ""
    embed_url: str = ""
    embed_host: str = ""
