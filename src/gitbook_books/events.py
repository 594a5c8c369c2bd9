from __future__ import annotations

from typing import Callable, Optional


class BuildEvent(dict):
    """Opaque event object for progress reporting."""
    pass


EventFn = Callable[[BuildEvent], None]


def _emit(cb: Optional[EventFn], ev: BuildEvent) -> None:
    if cb:
        try:
            cb(ev)
        except Exception:
            # Never let callbacks break the build
            pass
