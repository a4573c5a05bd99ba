"""Handles, table configuration, and compiled row artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple, Union

DEFAULT_PADDING_UNIT = 2


@dataclass(frozen=True)
class TableRef:
    """Opaque handle to a table; valid only against the builder that issued it."""

    table_index: int


@dataclass(frozen=True, order=True)
class RowRef:
    """Opaque handle to a compiled row, ordered by table then row index."""

    table_index: int
    row_index: int


@dataclass(frozen=True)
class FixedLayout:
    """Every column width is known up front; the row fills exactly ``width``."""

    width: int

    kind = "fixed"


@dataclass(frozen=True)
class SoftLayout:
    """One flexible column sized by the browser, never narrower than ``min_width``."""

    min_width: int

    kind = "soft"


TableLayout = Union[FixedLayout, SoftLayout]


@dataclass(frozen=True, init=False)
class SoftColumn:
    """
    Sub-column widths of a soft row.

    Exactly one entry must be ``None``; it marks the flexible slot. Entries
    before it form the left fixed group, entries after it the right one.
    ``percentage`` is accepted for compatibility and currently unused.
    """

    subcolumns: Tuple[Optional[int], ...]
    percentage: Optional[int] = None

    def __init__(self, subcolumns: Sequence[Optional[int]], percentage: Optional[int] = None) -> None:
        object.__setattr__(self, "subcolumns", tuple(subcolumns))
        object.__setattr__(self, "percentage", percentage)


@dataclass(frozen=True)
class CompiledRow:
    """
    Immutable output of the row compiler.

    ``fragments`` are markup pieces with one insertion point between each
    neighbouring pair. ``value_map`` maps insertion point ``i`` to the index of
    the caller value placed there; ``None`` means values are placed in order.
    """

    styles: str
    fragments: Tuple[str, ...]
    value_map: Optional[Tuple[int, ...]] = None

    @property
    def insertion_points(self) -> int:
        return max(len(self.fragments) - 1, 0)


def _empty_rows() -> list[CompiledRow]:
    return []


@dataclass
class TableConf:
    """A named table: its layout, padding unit, and append-only compiled rows."""

    index: int
    name: str
    layout: TableLayout
    padding_unit: int = DEFAULT_PADDING_UNIT
    rows: list[CompiledRow] = field(default_factory=_empty_rows)

    @property
    def ref(self) -> TableRef:
        return TableRef(self.index)

    def row_prefix(self, row_index: int) -> str:
        """Return the class-name prefix shared by every class of one row."""

        return f"{self.name}_r{row_index}"
