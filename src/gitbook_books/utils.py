from __future__ import annotations

import re
import unicodedata as ud


def make_title_filename(title: str) -> str:
    """Make a safe filename from a book title, keeping non-ASCII letters."""
    t = ud.normalize("NFKC", title or "")
    t = (
        t.replace('/', '-').replace('\\', '-').replace(':', ' - ')
        .replace('*', ' ').replace('?', ' ').replace('"', "'")
        .replace('<', '(').replace('>', ')').replace('|', '-')
        .strip()
    )
    t = re.sub(r"\s+", " ", t)
    if len(t) > 120:
        t = t[:120].rstrip()
    return t.strip(". ") or 'book'
