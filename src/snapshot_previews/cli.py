"""Command line entry point to record or verify preview snapshots.

Discovers previews below the given packages, renders each one and records
or compares it against ``<snapshot-dir>/<sanitized-name>.png``. Useful
outside pytest, e.g. to refresh every reference after an intentional UI
change.

Usage examples:
  snapshot-previews --package myapp.previews --snapshot-dir tests/snapshots
  snapshot-previews --package myapp.previews --include "Home.*" --record --headless
  snapshot-previews --package myapp.previews --list
  snapshot-previews --package myapp.previews --gallery

Exit status is 0 only when every rendered preview matched its reference.
"""

from __future__ import annotations

import argparse
import logging
import re
from pathlib import Path
from typing import List, Optional

from .config import settings
from .core.filters import FilterEntry, PreviewFilter
from .core.scanner import ModuleWalkRegistry
from .core.session import DiscoverySession
from .errors import RenderError, SnapshotIOError
from .snapshots.store import SnapshotStatus, SnapshotStore

_logger = logging.getLogger("snapshot_previews.cli")


def _entries(values: Optional[List[str]], as_regex: bool) -> Optional[List[FilterEntry]]:
    if not values:
        return None
    return [re.compile(v) for v in values] if as_regex else list(values)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="snapshot-previews", description="Record or verify preview snapshots")
    p.add_argument("--package", action="append", required=True, help="Package to scan (repeatable)")
    p.add_argument("--include", action="append", help="Declaration name or regex to include (repeatable)")
    p.add_argument("--exclude", action="append", help="Declaration name or regex to exclude (repeatable)")
    p.add_argument("--regex", action="store_true", help="Treat --include/--exclude as partial-match regexes")
    p.add_argument("--snapshot-dir", default=settings.SNAPSHOT_DIR_NAME, help="Reference image directory")
    p.add_argument("--record", action="store_true", help="Overwrite references instead of comparing")
    p.add_argument("--headless", action="store_true", help="Render off-screen")
    p.add_argument("--timeout", type=float, default=settings.DEFAULT_RENDER_TIMEOUT, help="Per-preview render timeout (s)")
    p.add_argument("--list", action="store_true", help="List discovered previews and exit")
    p.add_argument("--gallery", action="store_true", help="Open the preview gallery window")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    preview_filter = PreviewFilter.from_lists(
        _entries(args.include, args.regex), _entries(args.exclude, args.regex)
    )
    session = DiscoverySession(ModuleWalkRegistry(args.package), preview_filter)
    session.discover()
    preview_types = session.preview_types
    _logger.debug("Scanned %s: %d preview types", ", ".join(args.package), len(preview_types))
    if not preview_types:
        print("No previews discovered")
        return 1

    if args.list:
        from .gallery import gallery_rows

        for row in gallery_rows(preview_types):
            print(f"{row.title}  ({row.subtitle})")
        return 0

    # Rendering imports PyQt6; keep --list usable without it
    from .rendering.base import ensure_application
    from .rendering.selection import select_rendering_strategy
    from .testing.snapshot_test import snapshot_preview

    strategy = select_rendering_strategy(args.headless or settings.FORCE_HEADLESS)

    if args.gallery:  # pragma: no cover - interactive
        from .gallery import build_gallery_window

        window = build_gallery_window(session)
        window.resize(640, 720)
        window.show()
        return ensure_application().exec()

    store = SnapshotStore(Path(args.snapshot_dir))
    failures = 0
    for preview_type in preview_types:
        for index in range(len(preview_type.previews)):
            name = preview_type.snapshot_name(index)
            try:
                outcome = snapshot_preview(
                    preview_type,
                    index,
                    strategy=strategy,
                    store=store,
                    recording=args.record or settings.FORCE_RECORDING,
                    timeout=args.timeout,
                )
            except (RenderError, SnapshotIOError, ValueError) as exc:
                failures += 1
                print(f"[FAILED] {name}: {exc}")
                continue
            print(f"[{outcome.status.value.upper()}] {name} -> {outcome.path}")
            if outcome.status is not SnapshotStatus.MATCHED:
                failures += 1
    print(f"{failures} of {sum(len(t.previews) for t in preview_types)} previews need attention")
    return 1 if failures else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
