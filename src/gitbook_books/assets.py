from __future__ import annotations

import contextlib
import os
import shutil
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Set

from .events import BuildEvent, EventFn, _emit
from .exceptions import FetchError, ImageError, ManifestError
from .manifest import ASSETS_DIR
from .models import AssetRecord
from .providers import AssetFetcher, HttpAssetFetcher, ImageNormalizer, PillowImageNormalizer


@dataclass
class AssetReport:
    copied: List[str] = field(default_factory=list)
    downloaded: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    normalized: int = 0

    @property
    def touched(self) -> int:
        """Number of assets copied or downloaded in this run."""
        return len(self.copied) + len(self.downloaded)


def asset_target_name(uid: str, name: str) -> str:
    """On-disk filename for an asset; unique because uids are."""
    return f"asset{uid}-{name}"


def duplicate_names(assets: Mapping[str, AssetRecord]) -> Set[str]:
    """Names shared by more than one asset record."""
    counts = Counter(a.name for a in assets.values())
    return {name for name, n in counts.items() if n > 1}


def check_asset_name(name: str) -> None:
    """Reject names that would escape the assets directories."""
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise ManifestError(f"Invalid asset name {name!r}")


def resolve_assets(
    assets: Mapping[str, AssetRecord],
    source_dir: str,
    target_dir: str,
    *,
    fetcher: Optional[AssetFetcher] = None,
    normalizer: Optional[ImageNormalizer] = None,
    on_event: Optional[EventFn] = None,
    keep_going: bool = False,
) -> AssetReport:
    """Materialize every asset of the manifest into `target_dir`.

    Existing targets are skipped, so repeated runs are cheap. A bundled copy
    under `source_dir/assets/` is used only when its name is unambiguous;
    otherwise the asset is downloaded. Images are normalized after either
    path. Download and normalization failures raise FetchError or ImageError
    unless `keep_going` is set, in which case they are recorded in the report
    and the asset is left absent so the next run retries it. Names containing
    path separators raise ManifestError before anything is written.
    """
    _fetcher = fetcher or HttpAssetFetcher()
    _normalizer = normalizer or PillowImageNormalizer()
    for asset in assets.values():
        check_asset_name(asset.name)
    os.makedirs(target_dir, exist_ok=True)
    dupes = duplicate_names(assets)
    report = AssetReport()
    total = len(assets)
    _emit(on_event, BuildEvent(type="assets_start", total=total))

    for idx, asset in enumerate(assets.values(), start=1):
        target = os.path.join(target_dir, asset_target_name(asset.uid, asset.name))
        if os.path.exists(target):
            report.skipped.append(asset.uid)
            _emit(on_event, BuildEvent(type="asset_done", index=idx, total=total, uid=asset.uid, name=asset.name, action="skipped"))
            continue

        local = os.path.join(source_dir, ASSETS_DIR, asset.name)
        if asset.name not in dupes and os.path.isfile(local):
            shutil.copyfile(local, target)
            action = "copied"
        else:
            def on_status(received: int, size: Optional[int], _uid: str = asset.uid) -> None:
                _emit(on_event, BuildEvent(type="asset_download_progress", uid=_uid, received=received, size=size))

            try:
                _fetcher.fetch(asset.download_url, target, on_status)
            except FetchError as e:
                e.asset = asset
                if not keep_going:
                    raise
                report.failed.append(asset.uid)
                _emit(on_event, BuildEvent(type="asset_failed", index=idx, total=total, uid=asset.uid, name=asset.name, error=str(e)))
                continue
            action = "downloaded"

        if _normalizer.is_image(target):
            try:
                _normalizer.normalize(target)
            except ImageError as e:
                # an un-normalized target would be skipped on every later run
                with contextlib.suppress(OSError):
                    os.remove(target)
                e.asset = asset
                if not keep_going:
                    raise
                report.failed.append(asset.uid)
                _emit(on_event, BuildEvent(type="asset_failed", index=idx, total=total, uid=asset.uid, name=asset.name, error=str(e)))
                continue
            report.normalized += 1
        (report.copied if action == "copied" else report.downloaded).append(asset.uid)
        _emit(on_event, BuildEvent(type="asset_done", index=idx, total=total, uid=asset.uid, name=asset.name, action=action))

    _emit(on_event, BuildEvent(type="assets_done", total=total, copied=len(report.copied), downloaded=len(report.downloaded), skipped=len(report.skipped), failed=len(report.failed)))
    return report
