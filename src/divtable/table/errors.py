"""Exception hierarchy raised by the table layout compiler."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import RowRef, TableRef

__all__ = [
    "EmptyRowError",
    "EmptySoftColumnError",
    "InvalidFlexSlotCountError",
    "MinWidthTooSmallError",
    "MultipleSoftColumnsError",
    "NegativeSizeError",
    "RowKindMismatchError",
    "RowTooWideError",
    "RowWidthMismatchError",
    "TableError",
    "UnknownRowError",
    "UnknownTableError",
]


class TableError(RuntimeError):
    """Base class for table definition and rendering failures."""


class UnknownTableError(TableError):
    """Raised when a table handle does not resolve against the builder."""

    def __init__(self, table: "TableRef") -> None:
        super().__init__(f"Unknown table #{table.table_index}")
        self.table = table


class UnknownRowError(TableError):
    """Raised when a row handle does not resolve against the builder."""

    def __init__(self, row: "RowRef") -> None:
        super().__init__(f"Unknown row #{row.row_index} in table #{row.table_index}")
        self.row = row


class RowKindMismatchError(TableError):
    """Raised when a fixed row is requested on a soft table or vice versa."""

    def __init__(self, table: "TableRef", *, table_name: str, requested: str) -> None:
        actual = "soft" if requested == "fixed" else "fixed"
        super().__init__(f"Cannot add a {requested} row to {actual} table '{table_name}'")
        self.table = table
        self.table_name = table_name
        self.requested = requested


class EmptyRowError(TableError):
    """Raised when a row is declared without any columns."""

    def __init__(self, table_name: str) -> None:
        super().__init__(f"Row for table '{table_name}' has no columns")
        self.table_name = table_name


class EmptySoftColumnError(TableError):
    """Raised when a soft row is given no soft column."""

    def __init__(self, table_name: str) -> None:
        super().__init__(f"Soft row for table '{table_name}' has no soft column")
        self.table_name = table_name


class MultipleSoftColumnsError(TableError):
    """Raised when a soft row is given more than one soft column."""

    def __init__(self, table_name: str, count: int) -> None:
        super().__init__(
            f"Soft row for table '{table_name}' has {count} soft columns; only one is supported"
        )
        self.table_name = table_name
        self.count = count


class InvalidFlexSlotCountError(TableError):
    """Raised when a soft column does not contain exactly one flexible slot."""

    def __init__(self, table_name: str, slots: int) -> None:
        super().__init__(
            f"Soft column for table '{table_name}' must have exactly one flexible slot (found {slots})"
        )
        self.table_name = table_name
        self.slots = slots


class RowTooWideError(TableError):
    """Raised when a fixed table is too narrow for the requested columns."""

    def __init__(self, table_name: str, *, width: int, pads: int, asked: int, unknown: int) -> None:
        super().__init__(
            f"Row does not fit table '{table_name}': width={width}, padding={pads}, "
            f"requested={asked}, auto columns={unknown}"
        )
        self.table_name = table_name
        self.width = width
        self.pads = pads
        self.asked = asked
        self.unknown = unknown


class RowWidthMismatchError(TableError):
    """Raised when resolved column widths and padding do not add up to the table width."""

    def __init__(self, table_name: str, *, width: int, pads: int, resolved: int) -> None:
        super().__init__(
            f"Columns of table '{table_name}' resolve to {resolved} plus {pads} padding, "
            f"expected {width}"
        )
        self.table_name = table_name
        self.width = width
        self.pads = pads
        self.resolved = resolved


class MinWidthTooSmallError(TableError):
    """Raised when a soft table's minimum width cannot hold its fixed columns."""

    def __init__(self, table_name: str, *, min_width: int, reserved: int) -> None:
        super().__init__(
            f"Minimum width {min_width} of table '{table_name}' does not exceed "
            f"the {reserved} reserved by fixed columns"
        )
        self.table_name = table_name
        self.min_width = min_width
        self.reserved = reserved


class NegativeSizeError(TableError):
    """Raised when a width or padding unit passed to the builder is negative."""

    def __init__(self, table_name: str, *, what: str, value: int) -> None:
        super().__init__(f"{what} of table '{table_name}' must not be negative (got {value})")
        self.table_name = table_name
        self.what = what
        self.value = value
