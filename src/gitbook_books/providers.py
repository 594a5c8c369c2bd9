from __future__ import annotations

from typing import Callable, Optional, Protocol

from .embeds import resolve_embed
from .http import download
from .images import IMAGE_QUALITY, MAX_IMAGE_WIDTH, is_image, normalize_image
from .models import EmbedInfo

StatusFn = Callable[[int, Optional[int]], None]


class AssetFetcher(Protocol):
    def fetch(self, url: str, target_path: str, on_status: Optional[StatusFn] = None) -> None:  # raises FetchError
        ...


class ImageNormalizer(Protocol):
    def is_image(self, path: str) -> bool:
        ...

    def normalize(self, path: str) -> None:
        ...


class EmbedResolver(Protocol):
    def resolve(self, url: str) -> EmbedInfo:
        ...


class HttpAssetFetcher:
    """Default fetcher: plain HTTP(S) download into the target path."""

    def __init__(self, timeout: float = 60.0):
        self.timeout = timeout

    def fetch(self, url: str, target_path: str, on_status: Optional[StatusFn] = None) -> None:
        download(url, target_path, on_progress=on_status, timeout=self.timeout)


class PillowImageNormalizer:
    """Default normalizer: cap width and re-encode with Pillow."""

    def __init__(self, max_width: int = MAX_IMAGE_WIDTH, quality: float = IMAGE_QUALITY):
        self.max_width = max_width
        self.quality = quality

    def is_image(self, path: str) -> bool:
        return is_image(path)

    def normalize(self, path: str) -> None:
        normalize_image(path, max_width=self.max_width, quality=self.quality)


class NoopImageNormalizer:
    """Leaves every file untouched (CLI --no-normalize)."""

    def is_image(self, path: str) -> bool:
        return False

    def normalize(self, path: str) -> None:
        return None


class HtmlEmbedResolver:
    """Default embed resolver reading <meta> tags of the linked page."""

    def __init__(self, use_cache: bool = True):
        self.use_cache = use_cache

    def resolve(self, url: str) -> EmbedInfo:
        return resolve_embed(url, use_cache=self.use_cache)
