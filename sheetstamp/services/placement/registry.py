"""Ordered store of field placements with undo-last semantics."""

from __future__ import annotations

from typing import Collection, Iterable, Iterator, List, Optional

from sheetstamp_io.schema import FieldMapping


class MappingRegistry:
    """Append-only list of placements; the only removal is popping the newest.

    Callers validate mappings before adding them. Duplicates are kept and are
    all stamped.
    """

    def __init__(self, mappings: Iterable[FieldMapping] = ()) -> None:
        self._mappings: List[FieldMapping] = list(mappings)

    def add(self, mapping: FieldMapping) -> None:
        self._mappings.append(mapping)

    def remove_last(self) -> Optional[FieldMapping]:
        """Pop and return the most recent mapping; ``None`` when empty."""

        if not self._mappings:
            return None
        return self._mappings.pop()

    def list_for_page(self, page: int) -> Iterator[FieldMapping]:
        """Lazily yield mappings on ``page`` in insertion order."""

        return (m for m in self._mappings if m.page == page)

    def clear(self) -> None:
        self._mappings.clear()

    def pages(self) -> List[int]:
        return sorted({m.page for m in self._mappings})

    def fields(self) -> List[str]:
        return list(dict.fromkeys(m.field for m in self._mappings))

    def stale(self, columns: Collection[str]) -> List[FieldMapping]:
        """Mappings whose field is not part of ``columns``."""

        known = set(columns)
        return [m for m in self._mappings if m.field not in known]

    def snapshot(self) -> tuple[FieldMapping, ...]:
        return tuple(self._mappings)

    def __len__(self) -> int:
        return len(self._mappings)

    def __iter__(self) -> Iterator[FieldMapping]:
        return iter(tuple(self._mappings))

    def __bool__(self) -> bool:
        return bool(self._mappings)
