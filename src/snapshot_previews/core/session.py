"""Discovery session: scan, filter, extract, and hand out test identities.

A session owns the ``PreviewType`` list for one suite run. Test runners
ask it for ``DiscoveredPreviewAndIndex`` identities at collection time and
resolve them back to live ``Preview`` objects when the test executes.
Nothing is cached at module level; a new session re-runs discovery.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..errors import PreviewExtractionError, PreviewNotFoundError
from .filters import PreviewFilter
from .extraction import (
    Preview,
    PreviewType,
    preview_type_from_provider,
    preview_type_from_registry,
)
from .scanner import Conformance, DeclarationKind, SubclassRegistry, TypeRegistryQuery

__all__ = [
    "find_previews",
    "extract",
    "DiscoveredPreview",
    "DiscoveredPreviewAndIndex",
    "DiscoverySession",
]

_logger = logging.getLogger(__name__)


def extract(conformance: Conformance) -> Optional[PreviewType]:
    """Build the ``PreviewType`` of one declaration, or ``None`` to skip it."""
    cls = conformance.accessor()
    if conformance.kind is DeclarationKind.PREVIEW_PROVIDER:
        try:
            return preview_type_from_provider(conformance.type_name, cls)
        except PreviewExtractionError as exc:
            _logger.warning("Skipping %s", exc)
            return None
    if conformance.kind is DeclarationKind.PREVIEW_REGISTRY:
        return preview_type_from_registry(conformance.type_name, cls)
    return None


def find_previews(
    query: Optional[TypeRegistryQuery] = None,
    should_include: Callable[[str], bool] = lambda _: True,
) -> List[PreviewType]:
    query = query or SubclassRegistry()
    preview_types: List[PreviewType] = []
    skipped = 0
    for conformance in query.scan():
        if not query.supports(conformance.kind) or not should_include(conformance.name):
            skipped += 1
            continue
        preview_type = extract(conformance)
        if preview_type is None or not preview_type.previews:
            skipped += 1
            continue
        preview_types.append(preview_type)
    _logger.debug("Discovered %d preview types (%d skipped)", len(preview_types), skipped)
    return preview_types


@dataclass(frozen=True)
class DiscoveredPreview:
    type_name: str
    display_name: str
    preview_names: Tuple[str, ...]

    @property
    def preview_count(self) -> int:
        return len(self.preview_names)

    @classmethod
    def from_preview_type(cls, preview_type: PreviewType) -> "DiscoveredPreview":
        names = tuple(preview_type.snapshot_name(i) for i in range(len(preview_type.previews)))
        return cls(preview_type.type_name, preview_type.display_name, names)


@dataclass(frozen=True)
class DiscoveredPreviewAndIndex:
    preview: DiscoveredPreview
    index: int

    @property
    def name(self) -> str:
        return self.preview.preview_names[self.index]

    @property
    def test_id(self) -> str:
        short = self.preview.type_name.rsplit(".", 1)[-1]
        return f"{short}-{self.index}-{self.name}"


class DiscoverySession:
    def __init__(
        self,
        query: Optional[TypeRegistryQuery] = None,
        preview_filter: Optional[PreviewFilter] = None,
    ) -> None:
        self._query = query or SubclassRegistry()
        self._filter = preview_filter or PreviewFilter()
        self._preview_types: Optional[List[PreviewType]] = None

    @property
    def preview_types(self) -> List[PreviewType]:
        if self._preview_types is None:
            self.discover()
        return list(self._preview_types or [])

    def discover(self) -> List[DiscoveredPreview]:
        self._preview_types = find_previews(self._query, self._filter.should_include)
        return [DiscoveredPreview.from_preview_type(t) for t in self._preview_types]

    def cases(self) -> List[DiscoveredPreviewAndIndex]:
        cases: List[DiscoveredPreviewAndIndex] = []
        for preview_type in self.preview_types:
            discovered = DiscoveredPreview.from_preview_type(preview_type)
            cases.extend(DiscoveredPreviewAndIndex(discovered, i) for i in range(discovered.preview_count))
        return cases

    def resolve(self, case: DiscoveredPreviewAndIndex) -> Tuple[PreviewType, Preview]:
        for preview_type in self.preview_types:
            if preview_type.type_name != case.preview.type_name:
                continue
            if 0 <= case.index < len(preview_type.previews):
                return preview_type, preview_type.previews[case.index]
            break
        raise PreviewNotFoundError(f"Preview not found: {case.test_id}")
