"""Discovery of preview declarations without explicit registration.

The scanner asks a *type registry query* for every loaded class conforming
to one of the declaration shapes. Three queries are provided:

 - ``SubclassRegistry``: walks ``__subclasses__()`` of the declaration base
   classes, which covers every class defined in any imported module.
 - ``ModuleWalkRegistry``: first imports every module below the given
   packages (so declarations living in modules nobody imported yet become
   visible) and then walks subclasses like ``SubclassRegistry``.
 - ``StaticRegistry``: an explicit list, for builds that generate a
   registration module ahead of time.

Results are sorted by type name so repeated scans over the same set of
loaded modules produce identical output.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from dataclasses import dataclass
from enum import Enum
from typing import Callable, FrozenSet, Iterable, Iterator, List, Optional, Protocol, Sequence

from ..config import settings
from .declarations import PreviewProvider, PreviewRegistry

__all__ = [
    "DeclarationKind",
    "Conformance",
    "TypeRegistryQuery",
    "SubclassRegistry",
    "ModuleWalkRegistry",
    "StaticRegistry",
    "qualified_type_name",
    "default_supported_kinds",
]

_logger = logging.getLogger(__name__)


class DeclarationKind(str, Enum):
    PREVIEW_PROVIDER = "PreviewProvider"
    PREVIEW_REGISTRY = "PreviewRegistry"


_BASES = {
    DeclarationKind.PREVIEW_PROVIDER: PreviewProvider,
    DeclarationKind.PREVIEW_REGISTRY: PreviewRegistry,
}


@dataclass(frozen=True)
class Conformance:
    type_name: str
    kind: DeclarationKind
    accessor: Callable[[], type]

    @property
    def name(self) -> str:
        return self.type_name


def qualified_type_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def default_supported_kinds() -> FrozenSet[DeclarationKind]:
    kinds = {DeclarationKind.PREVIEW_PROVIDER}
    if settings.REGISTRY_DECLARATIONS_ENABLED:
        kinds.add(DeclarationKind.PREVIEW_REGISTRY)
    return frozenset(kinds)


class TypeRegistryQuery(Protocol):  # pragma: no cover - structural only
    def supports(self, kind: DeclarationKind) -> bool:
        ...

    def scan(self) -> List[Conformance]:
        ...


def _is_abstract(cls: type) -> bool:
    return bool(cls.__dict__.get("__preview_abstract__", False))


def _walk_subclasses(base: type) -> Iterator[type]:
    seen = set()
    stack = list(base.__subclasses__())
    while stack:
        cls = stack.pop()
        if cls in seen:
            continue
        seen.add(cls)
        stack.extend(cls.__subclasses__())
        yield cls


def _accessor(cls: type) -> Callable[[], type]:
    return lambda: cls


def _conformances(classes: Iterable[type], kinds: FrozenSet[DeclarationKind]) -> List[Conformance]:
    found = {}
    for cls in classes:
        if _is_abstract(cls):
            continue
        for kind in DeclarationKind:
            if kind in kinds and issubclass(cls, _BASES[kind]):
                name = qualified_type_name(cls)
                found[name] = Conformance(name, kind, _accessor(cls))
    return [found[name] for name in sorted(found)]


class SubclassRegistry:
    def __init__(self, kinds: Optional[Iterable[DeclarationKind]] = None) -> None:
        self._kinds = frozenset(kinds) if kinds is not None else default_supported_kinds()

    def supports(self, kind: DeclarationKind) -> bool:
        return kind in self._kinds

    def scan(self) -> List[Conformance]:
        classes: List[type] = []
        for kind in self._kinds:
            classes.extend(_walk_subclasses(_BASES[kind]))
        result = _conformances(classes, self._kinds)
        _logger.debug("Subclass scan found %d preview declarations", len(result))
        return result


class ModuleWalkRegistry(SubclassRegistry):
    def __init__(
        self, packages: Sequence[str], kinds: Optional[Iterable[DeclarationKind]] = None
    ) -> None:
        super().__init__(kinds)
        self._packages = list(packages)

    def import_all(self) -> List[str]:
        imported: List[str] = []
        for package_name in self._packages:
            try:
                package = importlib.import_module(package_name)
            except Exception as exc:  # noqa: BLE001 - a broken package must not stop discovery
                _logger.warning("Could not import preview package %s: %s", package_name, exc)
                continue
            imported.append(package_name)
            path = getattr(package, "__path__", None)
            if path is None:
                continue
            for info in pkgutil.walk_packages(path, prefix=package_name + ".", onerror=_log_walk_error):
                try:
                    importlib.import_module(info.name)
                except Exception as exc:  # noqa: BLE001
                    _logger.warning("Skipping module %s during preview scan: %s", info.name, exc)
                    continue
                imported.append(info.name)
        return imported

    def _in_scope(self, cls: type) -> bool:
        module = cls.__module__
        return any(module == p or module.startswith(p + ".") for p in self._packages)

    def scan(self) -> List[Conformance]:
        self.import_all()
        classes: List[type] = []
        for kind in self._kinds:
            classes.extend(c for c in _walk_subclasses(_BASES[kind]) if self._in_scope(c))
        result = _conformances(classes, self._kinds)
        _logger.debug("Module walk over %s found %d preview declarations", self._packages, len(result))
        return result


def _log_walk_error(name: str) -> None:
    _logger.warning("Skipping package %s during preview scan", name)


class StaticRegistry:
    def __init__(
        self, classes: Iterable[type], kinds: Optional[Iterable[DeclarationKind]] = None
    ) -> None:
        self._classes = list(classes)
        self._kinds = frozenset(kinds) if kinds is not None else default_supported_kinds()

    def supports(self, kind: DeclarationKind) -> bool:
        return kind in self._kinds

    def scan(self) -> List[Conformance]:
        return _conformances(self._classes, self._kinds)
