from __future__ import annotations

import dataclasses
import html
import json
from html.parser import HTMLParser
from typing import Any, Dict
from urllib.parse import urljoin, urlparse

from . import cache as _cache
from .exceptions import FetchError
from .http import fetch
from .models import EmbedInfo


class MetaParser(HTMLParser):
    """Collect <title>, <meta> and <link rel> values from a page head."""

    def __init__(self):
        super().__init__()
        self.in_title = False
        self.title_buf = []
        self.meta: Dict[str, str] = {}
        self.links: Dict[str, str] = {}

    def handle_starttag(self, tag, attrs):
        a = {k.lower(): (v or "") for k, v in attrs}
        if tag == "title":
            self.in_title = True
        elif tag == "meta":
            key = (a.get("property") or a.get("name") or "").lower()
            if key and key not in self.meta:
                self.meta[key] = a.get("content", "").strip()
        elif tag == "link":
            href = a.get("href", "").strip()
            for rel in a.get("rel", "").lower().split():
                if href and rel not in self.links:
                    self.links[rel] = href

    def handle_data(self, data):
        if self.in_title:
            self.title_buf.append(data)

    def handle_endtag(self, tag):
        if tag == "title":
            self.in_title = False

    @property
    def title(self) -> str:
        return " ".join("".join(self.title_buf).split())


def parse_embed_info(url: str, html_text: str) -> EmbedInfo:
    p = MetaParser()
    p.feed(html_text)
    meta = p.meta
    canonical = meta.get("og:url") or p.links.get("canonical") or url
    canonical = urljoin(url, canonical)
    icon = p.links.get("icon") or p.links.get("apple-touch-icon") or ""
    return EmbedInfo(
        page_title=meta.get("og:title") or p.title,
        page_description=meta.get("og:description") or meta.get("description") or "",
        page_icon=urljoin(url, icon) if icon else "",
        embed_url=canonical,
        embed_host=urlparse(canonical).hostname or "",
    )


def resolve_embed(url: str, *, use_cache: bool = True) -> EmbedInfo:
    """Look up display metadata for an external URL.

    Pages that cannot be fetched still produce a card carrying the URL and
    its host.
    """
    if use_cache:
        got = _cache.get_json("embed", url)
        if isinstance(got, dict):
            return EmbedInfo(**{f.name: got.get(f.name, "") for f in dataclasses.fields(EmbedInfo)})
    try:
        info = parse_embed_info(url, fetch(url, use_cache=use_cache))
    except FetchError:
        return EmbedInfo(embed_url=url, embed_host=urlparse(url).hostname or "")
    if use_cache:
        _cache.put_json("embed", url, dataclasses.asdict(info))
    return info


def render_embed_card(info: EmbedInfo) -> str:
    esc = html.escape
    parts = ['<div class="embed-card">']
    if info.page_icon:
        parts.append(f'  <img class="embed-icon" src="{esc(info.page_icon)}" alt="" />')
    parts.append(f'  <div class="embed-title">{esc(info.page_title)}</div>')
    if info.page_description:
        parts.append(f'  <div class="embed-description">{esc(info.page_description)}</div>')
    parts.append(f'  <a class="embed-link" href="{esc(info.embed_url)}">{esc(info.embed_host)}</a>')
    parts.append("</div>")
    return "\n".join(parts)


def render_unknown_embed(data: Any) -> str:
    raw = json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True, default=str)
    return (
        '<div class="embed-unknown">\n'
        "  <strong>Unknown embed type</strong>\n"
        f"  <pre>{html.escape(raw)}</pre>\n"
        "</div>"
    )


def render_embed_block(data: Dict[str, Any], resolver=None) -> str:
    """Render an embed block from page-node data.

    `resolver` is any object with `resolve(url) -> EmbedInfo`; the HTML meta
    lookup is used when omitted. Nodes without a `url` field get the
    diagnostic "Unknown embed type" block.
    """
    if not isinstance(data, dict) or "url" not in data:
        return render_unknown_embed(data)
    url = data["url"]
    info = resolver.resolve(url) if resolver is not None else resolve_embed(url)
    return render_embed_card(info)
