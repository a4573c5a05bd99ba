"""Table layout compiler: fixed and soft rows compiled to CSS and markup fragments."""

from .builder import PLACEHOLDER, TableBuilder, TableDrawer
from .compiler import compile_fixed_row, compile_soft_row, resolve_fixed_widths
from .errors import (
    EmptyRowError,
    EmptySoftColumnError,
    InvalidFlexSlotCountError,
    MinWidthTooSmallError,
    MultipleSoftColumnsError,
    NegativeSizeError,
    RowKindMismatchError,
    RowTooWideError,
    RowWidthMismatchError,
    TableError,
    UnknownRowError,
    UnknownTableError,
)
from .models import (
    DEFAULT_PADDING_UNIT,
    CompiledRow,
    FixedLayout,
    RowRef,
    SoftColumn,
    SoftLayout,
    TableConf,
    TableRef,
)

__all__ = [
    "DEFAULT_PADDING_UNIT",
    "PLACEHOLDER",
    "CompiledRow",
    "EmptyRowError",
    "EmptySoftColumnError",
    "FixedLayout",
    "InvalidFlexSlotCountError",
    "MinWidthTooSmallError",
    "MultipleSoftColumnsError",
    "NegativeSizeError",
    "RowKindMismatchError",
    "RowRef",
    "RowTooWideError",
    "RowWidthMismatchError",
    "SoftColumn",
    "SoftLayout",
    "TableBuilder",
    "TableConf",
    "TableDrawer",
    "TableError",
    "TableRef",
    "UnknownRowError",
    "UnknownTableError",
    "compile_fixed_row",
    "compile_soft_row",
    "resolve_fixed_widths",
]
