from __future__ import annotations

from typing import Optional


class GitbookError(Exception):
    """Base user-facing error for gitbook_books.

    Use this for predictable, actionable failures (not an export, bad manifest,
    failed download). CLI will catch this and print a concise message without a
    traceback.
    """


class NotABookExport(GitbookError):
    """Directory does not contain a revision.json manifest."""


class ManifestError(GitbookError):
    """revision.json or space.json is unreadable or structurally invalid."""


class FetchError(GitbookError):
    """Network retrieval error for an asset or an embedded page."""

    def __init__(self, message: str, *, url: Optional[str] = None, asset=None):
        super().__init__(message)
        self.url = url
        self.asset = asset


class ImageError(GitbookError):
    """Image could not be decoded or re-encoded."""

    def __init__(self, message: str, *, asset=None):
        super().__init__(message)
        self.asset = asset
