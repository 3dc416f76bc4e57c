"""Include / exclude filtering of preview declaration names.

Entries are either plain strings or compiled regular expressions:

 - ``str``: literal equality, or a full regex match when the string is a
   valid pattern (``"Home.*"`` matches ``HomeScreen_Previews``).
 - ``re.Pattern``: partial match via ``search``.

A name is tested in its fully qualified form and by its final component, so
``"HomeScreen_Previews"`` selects ``app.screens.HomeScreen_Previews``.
Exclusion wins over inclusion; a missing list imposes no constraint.
Filtering runs on declaration names before any preview is extracted.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Pattern, Sequence, Tuple, Union

__all__ = ["FilterEntry", "PreviewFilter", "matches_entry"]

_logger = logging.getLogger(__name__)

FilterEntry = Union[str, Pattern[str]]


@lru_cache(maxsize=256)
def _compile(entry: str) -> Optional[Pattern[str]]:
    try:
        return re.compile(entry)
    except re.error:
        _logger.debug("Filter entry %r is not a valid regex; using literal match only", entry)
        return None


def _candidates(name: str) -> Tuple[str, ...]:
    tail = name.rsplit(".", 1)[-1]
    return (name,) if tail == name else (name, tail)


def matches_entry(entry: FilterEntry, name: str) -> bool:
    for candidate in _candidates(name):
        if isinstance(entry, str):
            if candidate == entry:
                return True
            pattern = _compile(entry)
            if pattern is not None and pattern.fullmatch(candidate):
                return True
        elif entry.search(candidate):
            return True
    return False


@dataclass(frozen=True)
class PreviewFilter:
    included: Optional[Tuple[FilterEntry, ...]] = None
    excluded: Optional[Tuple[FilterEntry, ...]] = None

    @classmethod
    def from_lists(
        cls,
        included: Optional[Sequence[FilterEntry]] = None,
        excluded: Optional[Sequence[FilterEntry]] = None,
    ) -> "PreviewFilter":
        return cls(
            tuple(included) if included is not None else None,
            tuple(excluded) if excluded is not None else None,
        )

    def should_include(self, name: str) -> bool:
        if self.excluded is not None and any(matches_entry(e, name) for e in self.excluded):
            return False
        if self.included is not None:
            return any(matches_entry(e, name) for e in self.included)
        return True

    __call__ = should_include
