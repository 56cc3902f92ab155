from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

logger = logging.getLogger(__name__)

_D = TypeVar("_D")


# -----------------------------
# Dependencies
# -----------------------------

class DependencyRegistry:
    """Deduplicated classpath references, kept in first-insertion order."""

    def __init__(self) -> None:
        self._seen: set[str] = set()
        self._order: list[str] = []

    def add(self, ref: str) -> None:
        if ref in self._seen:
            return
        self._seen.add(ref)
        self._order.append(ref)

    def add_all(self, refs: Iterable[str]) -> None:
        for ref in refs:
            self.add(ref)

    def __contains__(self, ref: object) -> bool:
        return ref in self._seen

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def render(self, quote: Callable[[str], str], keyword: str = "$dependencies") -> str:
        if not self._order:
            return ""
        return f"{keyword}: [{','.join(quote(ref) for ref in self._order)}],"


# -----------------------------
# Macro / view descriptors
# -----------------------------

@dataclass
class MacroDescriptor:
    definition: Any = None  # statement of the first definition


@dataclass
class ViewDescriptor:
    first_definition: Any = None
    nb_params: int | None = None


class SymbolRegistry(Generic[_D]):
    """
    Get-or-create slots keyed by name. The registry never inspects what the
    statement processor stores in a descriptor.
    """

    def __init__(self, factory: Callable[[], _D]) -> None:
        self._factory = factory
        self._slots: dict[str, _D] = {}

    def get(self, name: str) -> _D:
        slot = self._slots.get(name)
        if slot is None:
            slot = self._factory()
            self._slots[name] = slot
            logger.debug("new %s for %r", type(slot).__name__, name)
        return slot

    def __contains__(self, name: object) -> bool:
        return name in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def items(self) -> Iterator[tuple[str, _D]]:
        return iter(self._slots.items())
