"""Thin CLI over the library: resolve assets and build the TOC of an export."""
from __future__ import annotations

from typing import List, Optional
import argparse
import sys

from .api import convert_export, list_versions
from .exceptions import GitbookError
from .providers import NoopImageNormalizer
from .toc import CURRENT_VERSION


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="gitbook-books",
        description="Resolve assets and build a table of contents from a GitBook export directory",
    )
    ap.add_argument("export_dir", help="Export directory containing revision.json")
    ap.add_argument("-o", "--output", help="Output directory (default: output/<book title>)")
    ap.add_argument("--book-version", default=CURRENT_VERSION, help="Version id to build the TOC for (default: current)")
    ap.add_argument("--keep-going", action="store_true", help="Continue when an asset download fails")
    ap.add_argument("--no-normalize", action="store_true", help="Do not resize/re-encode images")
    ap.add_argument("--list-versions", action="store_true", help="Print the export's versions and exit")
    args = ap.parse_args(argv)

    try:
        if args.list_versions:
            for vid, title, primary in list_versions(args.export_dir):
                print(f"{'*' if primary else ' '} {vid}\t{title}")
            return 0

        def on_event(ev: dict) -> None:
            # Simple CLI progress feedback without polluting library API
            t = ev.get("type")
            if t == "assets_start":
                print(f"[+] Resolving {ev.get('total')} assets")
            elif t == "asset_done":
                print(f"[ {ev.get('index'):03d}/{ev.get('total'):03d} ] {ev.get('action'):<10} {ev.get('name')}")
            elif t == "asset_failed":
                print(f"[ {ev.get('index'):03d}/{ev.get('total'):03d} ] failed     {ev.get('name')}: {ev.get('error')}", file=sys.stderr)
            elif t == "assets_done":
                print("[✓] Assets resolved.")
            elif t == "toc_start":
                print(f"[+] Building TOC for version '{ev.get('version')}'")
            elif t == "toc_done":
                if ev.get("version") is None:
                    print("[!] Unknown version, TOC is empty")
                print("[✓] TOC built.")

        result = convert_export(
            args.export_dir,
            args.output,
            version=args.book_version,
            normalizer=NoopImageNormalizer() if args.no_normalize else None,
            keep_going=args.keep_going,
            on_event=on_event,
        )
        if result.assets.failed:
            print(f"[!] {len(result.assets.failed)} asset(s) failed to download", file=sys.stderr)
            return 1
        print(f"[✓] Done: {result.out_dir}")
        return 0
    except GitbookError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 2
