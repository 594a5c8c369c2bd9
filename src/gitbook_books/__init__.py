"""gitbook_books public API (library-first).

Exports stable functions and classes for use by other applications. The CLI is
thin and delegates to internal modules.
"""
from __future__ import annotations

from .api import ExportResult, convert_export, list_versions
from .assets import AssetReport, asset_target_name, duplicate_names, resolve_assets
from .embeds import render_embed_block, render_embed_card, resolve_embed
from .exceptions import FetchError, GitbookError, ImageError, ManifestError, NotABookExport
from .images import is_image, normalize_image
from .manifest import load_revision, load_space, parse_revision
from .models import AssetRecord, EmbedInfo, NavNode, PageNode, RevisionManifest, SpaceMeta, Version
from .providers import HtmlEmbedResolver, HttpAssetFetcher, PillowImageNormalizer
from .toc import build_toc, resolve_version_id, toc_to_dicts

__all__ = [
    "ExportResult",
    "convert_export",
    "list_versions",
    "AssetReport",
    "asset_target_name",
    "duplicate_names",
    "resolve_assets",
    "render_embed_block",
    "render_embed_card",
    "resolve_embed",
    "FetchError",
    "GitbookError",
    "ImageError",
    "ManifestError",
    "NotABookExport",
    "is_image",
    "normalize_image",
    "load_revision",
    "load_space",
    "parse_revision",
    "AssetRecord",
    "EmbedInfo",
    "NavNode",
    "PageNode",
    "RevisionManifest",
    "SpaceMeta",
    "Version",
    "HtmlEmbedResolver",
    "HttpAssetFetcher",
    "PillowImageNormalizer",
    "build_toc",
    "resolve_version_id",
    "toc_to_dicts",
]
