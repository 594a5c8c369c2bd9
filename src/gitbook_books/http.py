from __future__ import annotations

import contextlib
import http.client
import os
import time
from typing import Callable, Optional
from urllib.request import Request, urlopen

from . import cache as _cache
from .exceptions import FetchError

UA = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36"
)

CHUNK_SIZE = 64 * 1024

ProgressFn = Callable[[int, Optional[int]], None]

# urllib raises OSError for transport problems, ValueError for malformed or
# unsupported URLs and http.client.HTTPException for protocol errors.
_TRANSPORT_ERRORS = (OSError, ValueError, http.client.HTTPException)


def fetch(url: str, *, retry: int = 3, sleep: float = 1.0, use_cache: bool = True) -> str:
    """Fetch URL text as UTF-8 with basic retries and optional cache."""
    last_err: Optional[Exception] = None
    if use_cache:
        got = _cache.get_text("html", url)
        if got is not None:
            return got
    for attempt in range(retry):
        try:
            req = Request(
                url,
                headers={
                    "User-Agent": UA,
                    "Accept-Language": "en;q=0.8",
                },
            )
            with contextlib.closing(urlopen(req, timeout=20)) as resp:
                data = resp.read()
        except ValueError as e:
            raise FetchError(f"Invalid URL {url!r}: {e}", url=url) from e
        except _TRANSPORT_ERRORS as e:
            last_err = e
            if attempt + 1 < retry:
                time.sleep(sleep * (2 ** attempt))
            continue
        text = data.decode("utf-8", errors="ignore")
        if use_cache:
            _cache.put_text("html", url, text)
        return text
    raise FetchError(f"Failed to fetch {url}: {last_err}", url=url)


def download(url: str, target_path: str, *, on_progress: Optional[ProgressFn] = None, timeout: float = 60.0) -> int:
    """Stream `url` into `target_path`; returns the number of bytes written.

    Data lands in `<target_path>.part` first and is renamed only once the
    advertised Content-Length has arrived, so a failed or truncated transfer
    never leaves a file at `target_path`. No retries.
    """
    if not url:
        raise FetchError(f"No download URL for {os.path.basename(target_path)}", url=url)
    part = target_path + ".part"
    received = 0
    try:
        req = Request(url, headers={"User-Agent": UA})
        with contextlib.closing(urlopen(req, timeout=timeout)) as resp:
            length = resp.headers.get("Content-Length")
            total = int(length) if length and length.isdigit() else None
            with open(part, "wb") as fh:
                while True:
                    chunk = resp.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    fh.write(chunk)
                    received += len(chunk)
                    if on_progress:
                        on_progress(received, total)
        if total is not None and received != total:
            raise FetchError(f"Truncated download of {url}: got {received} of {total} bytes", url=url)
        os.replace(part, target_path)
    except FetchError:
        with contextlib.suppress(OSError):
            os.remove(part)
        raise
    except _TRANSPORT_ERRORS as e:
        with contextlib.suppress(OSError):
            os.remove(part)
        raise FetchError(f"Failed to download {url}: {e}", url=url) from e
    return received
