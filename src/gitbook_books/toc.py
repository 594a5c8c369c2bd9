from __future__ import annotations

from typing import Any, Dict, List, Optional

from .models import NavNode, PageNode, RevisionManifest

CURRENT_VERSION = "current"


def resolve_version_id(manifest: RevisionManifest, selector: str) -> Optional[str]:
    """Map a version selector to a known version id, or None if unknown."""
    vid = manifest.primary_version_id if selector == CURRENT_VERSION else selector
    return vid if vid in manifest.versions else None


def _nav_node(page: PageNode) -> NavNode:
    return NavNode(
        uid=page.uid or "",
        title=page.title,
        type="page" if page.kind == "document" else "section",
        path=page.path,
        children=[_nav_node(c) for c in page.pages],
    )


def build_toc(manifest: RevisionManifest, selector: str = CURRENT_VERSION) -> List[NavNode]:
    """Flatten a version's page tree into navigation nodes.

    The root page comes first, always typed "page" and without children; its
    descendants follow as top-level siblings, each keeping its own nesting.
    Unknown versions yield an empty list.
    """
    vid = resolve_version_id(manifest, selector)
    if vid is None:
        return []
    top = manifest.versions[vid].page
    root = NavNode(uid=top.uid or "", title=top.title, type="page", path=top.path, children=[])
    return [root] + [_nav_node(p) for p in top.pages]


def toc_to_dicts(nodes: List[NavNode]) -> List[Dict[str, Any]]:
    return [n.to_dict() for n in nodes]
