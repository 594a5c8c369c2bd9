from __future__ import annotations

import io
import os

from PIL import Image, UnidentifiedImageError

from .exceptions import ImageError

MAX_IMAGE_WIDTH = 700
IMAGE_QUALITY = 0.8  # 0..1, mapped to Pillow's 1..95 scale for lossy formats

# GIF/SVG are left alone: re-encoding would drop animation frames or rasterize.
IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".tif", ".tiff"}
_LOSSY = {"JPEG", "WEBP"}


def is_image(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in IMAGE_EXTS


def _fit_width(size: tuple[int, int], max_width: int) -> tuple[int, int]:
    w, h = size
    if w <= max_width:
        return w, h
    return max_width, max(1, round(h * max_width / w))


def normalize_image(path: str, *, max_width: int = MAX_IMAGE_WIDTH, quality: float = IMAGE_QUALITY) -> tuple[int, int]:
    """Shrink an image to `max_width` if wider, then re-encode it in place.

    Re-encoding happens even when no resize is needed. Returns the final size.
    """
    try:
        with Image.open(path) as im:
            fmt = im.format or "PNG"
            if fmt == "MPO":
                # multi-picture camera JPEGs; only the primary image is kept
                fmt = "JPEG"
            im.load()
            new_size = _fit_width(im.size, max_width)
            out_im = im.resize(new_size, Image.Resampling.BILINEAR) if new_size != im.size else im.copy()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageError(f"Cannot decode image {path}: {e}") from e

    params: dict = {}
    if fmt in _LOSSY:
        params["quality"] = max(1, min(95, int(round(quality * 100))))
        if fmt == "JPEG" and out_im.mode not in ("RGB", "L", "CMYK"):
            out_im = out_im.convert("RGB")
    elif fmt == "PNG":
        params["optimize"] = True

    buf = io.BytesIO()
    try:
        out_im.save(buf, format=fmt, **params)
    except (OSError, ValueError) as e:
        raise ImageError(f"Cannot re-encode image {path}: {e}") from e
    tmp = path + ".tmp"
    with open(tmp, "wb") as fh:
        fh.write(buf.getvalue())
    os.replace(tmp, path)
    return out_im.size
