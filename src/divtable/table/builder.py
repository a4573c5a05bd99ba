"""Table registry, render-time filler, and usage-tracked style emission."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence, Set

from .compiler import compile_fixed_row, compile_soft_row
from .errors import NegativeSizeError, RowKindMismatchError, UnknownRowError, UnknownTableError
from .models import (
    CompiledRow,
    FixedLayout,
    RowRef,
    SoftColumn,
    SoftLayout,
    TableConf,
    TableLayout,
    TableRef,
)

__all__ = [
    "PLACEHOLDER",
    "TableBuilder",
    "TableDrawer",
]

logger = logging.getLogger(__name__)

PLACEHOLDER = "&nbsp;"


def _check_widths(table_name: str, widths: Sequence[Optional[int]], what: str) -> None:
    for width in widths:
        if width is not None and width < 0:
            raise NegativeSizeError(table_name, what=what, value=width)


class TableDrawer:
    """
    Rows rendered during one render pass.

    A drawer belongs to a single pass: sharing it between passes merges their
    used rows and the emitted CSS along with them.
    """

    def __init__(self) -> None:
        self._rows: Set[RowRef] = set()

    def add(self, row: RowRef) -> None:
        self._rows.add(row)

    def __contains__(self, row: object) -> bool:
        return row in self._rows

    def __iter__(self) -> Iterator[RowRef]:
        return iter(sorted(self._rows))

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"TableDrawer({sorted(self._rows)!r})"


class TableBuilder:
    """
    Registry of named tables and their compiled rows.

    Tables and rows are appended during setup and never change afterwards, so
    a fully built registry may be rendered from several threads at once.
    Adding rows while other threads render is not safe.
    """

    def __init__(self) -> None:
        self._tables: List[TableConf] = []

    def __len__(self) -> int:
        return len(self._tables)

    def _add_table(self, name: str, layout: TableLayout, width: int) -> TableRef:
        if width < 0:
            raise NegativeSizeError(str(name), what="Width", value=width)
        ref = TableRef(len(self._tables))
        self._tables.append(TableConf(index=ref.table_index, name=str(name), layout=layout))
        logger.debug("Registered %s table '%s' as #%d", layout.kind, name, ref.table_index)
        return ref

    def table_fixed(self, name: str, width: int) -> TableRef:
        """Register a table whose rows fill exactly ``width``."""

        return self._add_table(name, FixedLayout(width), width)

    def table_soft(self, name: str, min_width: int) -> TableRef:
        """Register a table whose rows have one flexible column and at least ``min_width``."""

        return self._add_table(name, SoftLayout(min_width), min_width)

    def table(self, ref: TableRef) -> TableConf:
        if not 0 <= ref.table_index < len(self._tables):
            raise UnknownTableError(ref)
        return self._tables[ref.table_index]

    def set_padding_unit(self, ref: TableRef, unit: int) -> None:
        """Change the padding unit used by rows compiled from now on."""

        table = self.table(ref)
        if unit < 0:
            raise NegativeSizeError(table.name, what="Padding unit", value=unit)
        table.padding_unit = unit

    def compiled(self, ref: RowRef) -> CompiledRow:
        if not 0 <= ref.table_index < len(self._tables):
            raise UnknownRowError(ref)
        rows = self._tables[ref.table_index].rows
        if not 0 <= ref.row_index < len(rows):
            raise UnknownRowError(ref)
        return rows[ref.row_index]

    def _append_row(self, table: TableConf, row: CompiledRow) -> RowRef:
        ref = RowRef(table.index, len(table.rows))
        table.rows.append(row)
        return ref

    def create_row_fixed(self, ref: TableRef, columns: Sequence[Optional[int]]) -> RowRef:
        """
        Compile a row for a fixed table.

        ``None`` entries are auto columns sharing the width left over by the
        known columns and padding.
        """

        table = self.table(ref)
        if not isinstance(table.layout, FixedLayout):
            raise RowKindMismatchError(ref, table_name=table.name, requested="fixed")
        _check_widths(table.name, columns, "Column width")
        return self._append_row(table, compile_fixed_row(table, table.layout.width, columns))

    def create_row_soft(self, ref: TableRef, columns: Sequence[SoftColumn]) -> RowRef:
        """Compile a row for a soft table from a single :class:`SoftColumn`."""

        table = self.table(ref)
        if not isinstance(table.layout, SoftLayout):
            raise RowKindMismatchError(ref, table_name=table.name, requested="soft")
        for column in columns:
            _check_widths(table.name, column.subcolumns, "Sub-column width")
        return self._append_row(table, compile_soft_row(table, table.layout.min_width, columns))

    def row(self, ref: RowRef, css_class: str, values: Sequence[str], drawer: TableDrawer) -> str:
        """
        Fill a compiled row with ``values`` and record it as used in ``drawer``.

        Missing trailing values render as a non-breaking space; extra values
        are ignored. Values are inserted verbatim, escaping is up to the caller.
        """

        compiled = self.compiled(ref)
        drawer.add(ref)
        count = compiled.insertion_points
        if count == 0:
            return ""
        filled = list(values[:count])
        if len(filled) < count:
            filled.extend(PLACEHOLDER for _ in range(count - len(filled)))

        parts = [f"<div class='{css_class}'>\n"]
        value_map = compiled.value_map
        for index, fragment in enumerate(compiled.fragments):
            parts.append(fragment)
            if index >= count:
                continue
            if value_map is None:
                parts.append(filled[index])
            elif index < len(value_map) and value_map[index] < count:
                parts.append(filled[value_map[index]])
        parts.append("</div>")
        return "".join(parts)

    def styles(self, drawer: TableDrawer) -> str:
        """Return the CSS of every row recorded in ``drawer``, ordered by table then row."""

        chunks: List[str] = []
        for ref in drawer:
            try:
                chunks.append(self.compiled(ref).styles)
            except UnknownRowError:
                logger.debug("Skipping styles for unresolved row %s", ref)
        return "".join(chunks)
