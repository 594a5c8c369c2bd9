from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import List, Optional

from .assets import AssetReport, resolve_assets
from .events import BuildEvent, EventFn, _emit
from .manifest import load_revision, load_space
from .models import NavNode
from .providers import AssetFetcher, ImageNormalizer
from .toc import CURRENT_VERSION, build_toc, resolve_version_id, toc_to_dicts
from .utils import make_title_filename

TOC_FILE = "toc.json"
ASSETS_OUT_DIR = "assets"


@dataclass
class ExportResult:
    title: str
    out_dir: str
    version_id: Optional[str]
    toc: List[NavNode]
    assets: AssetReport

    @property
    def toc_path(self) -> str:
        return os.path.join(self.out_dir, TOC_FILE)


def default_out_dir(title: str) -> str:
    return os.path.join("output", make_title_filename(title))


def convert_export(
    export_dir: str,
    out_dir: Optional[str] = None,
    *,
    version: str = CURRENT_VERSION,
    fetcher: Optional[AssetFetcher] = None,
    normalizer: Optional[ImageNormalizer] = None,
    keep_going: bool = False,
    on_event: Optional[EventFn] = None,
) -> ExportResult:
    """Resolve assets and build the TOC for one book export.

    Writes `<out_dir>/assets/` and `<out_dir>/toc.json`. Safe to re-run over
    the same output directory: assets already present are not touched.
    """
    manifest = load_revision(export_dir)
    space = load_space(export_dir)
    out_dir = out_dir or default_out_dir(space.name)
    _emit(on_event, BuildEvent(type="export_start", title=space.name, out_dir=out_dir))

    report = resolve_assets(
        manifest.assets,
        export_dir,
        os.path.join(out_dir, ASSETS_OUT_DIR),
        fetcher=fetcher,
        normalizer=normalizer,
        on_event=on_event,
        keep_going=keep_going,
    )

    _emit(on_event, BuildEvent(type="toc_start", version=version))
    vid = resolve_version_id(manifest, version)
    toc = build_toc(manifest, version)
    os.makedirs(out_dir, exist_ok=True)
    with open(os.path.join(out_dir, TOC_FILE), "w", encoding="utf-8") as fh:
        json.dump({"title": space.name, "version": vid, "toc": toc_to_dicts(toc)}, fh, ensure_ascii=False, indent=2)
    _emit(on_event, BuildEvent(type="toc_done", version=vid, entries=len(toc)))

    _emit(on_event, BuildEvent(type="export_done", out_dir=out_dir))
    return ExportResult(title=space.name, out_dir=out_dir, version_id=vid, toc=toc, assets=report)


def list_versions(export_dir: str) -> List[tuple[str, str, bool]]:
    """Return (version id, title, is_primary) for every version of an export."""
    manifest = load_revision(export_dir)
    return [
        (vid, v.title, vid == manifest.primary_version_id)
        for vid, v in manifest.versions.items()
    ]
