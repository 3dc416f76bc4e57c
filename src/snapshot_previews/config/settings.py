"""Global configuration and constants for preview snapshot testing.

Values are read once at import time. Environment variables allow CI jobs to
force recording or headless rendering without touching test code; the
``SnapshotTest`` hooks still take precedence when a subclass overrides them.
"""

from __future__ import annotations

import os
from typing import Final


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


SNAPSHOT_DIR_NAME: Final = "snapshots"
SNAPSHOT_EXTENSION: Final = ".png"

DEFAULT_RENDER_TIMEOUT: Final = _env_float("SNAPSHOT_PREVIEWS_TIMEOUT", 10.0)  # seconds
FORCE_RECORDING: Final = _env_flag("SNAPSHOT_PREVIEWS_RECORD")
FORCE_HEADLESS: Final = _env_flag("SNAPSHOT_PREVIEWS_HEADLESS")
REGISTRY_DECLARATIONS_ENABLED: Final = not _env_flag("SNAPSHOT_PREVIEWS_DISABLE_REGISTRY")

# Qt platform plugins that cannot present a real top-level window
HEADLESS_QT_PLATFORMS: Final = frozenset({"offscreen", "minimal", "vnc"})

# Attachment labels surfaced to the test report
SNAPSHOT_ATTACHMENT_NAME: Final = "Snapshot"
REFERENCE_ATTACHMENT_NAME: Final = "Reference"
