"""Row compilers turning column declarations into immutable compiled rows."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .errors import (
    EmptyRowError,
    EmptySoftColumnError,
    MultipleSoftColumnsError,
    RowTooWideError,
    RowWidthMismatchError,
)
from .models import CompiledRow, SoftColumn, TableConf
from .tree import flatten_layout, plan_soft_column

__all__ = [
    "compile_fixed_row",
    "compile_soft_row",
    "resolve_fixed_widths",
]

logger = logging.getLogger(__name__)


def _selector_list(classes: Sequence[str]) -> str:
    return ", ".join(f".{css_class}" for css_class in classes)


def _rule(classes: Sequence[str], body: str) -> str:
    """Return one CSS rule, or nothing when there is no class to select."""

    if not classes:
        return ""
    return f"{_selector_list(classes)} {{ {body} }}\n"


def resolve_fixed_widths(
    table_name: str,
    width: int,
    columns: Sequence[Optional[int]],
    padding_unit: int,
) -> List[int]:
    """
    Resolve every column of a fixed row to a concrete width.

    Known widths are kept; the space left after padding and known widths is
    split across the auto (``None``) columns, the first ``leftover % auto``
    of them getting one extra unit.

    Raises:
        EmptyRowError: If ``columns`` is empty.
        RowTooWideError: If the table is narrower than padding, known widths,
            and one unit per auto column.
        RowWidthMismatchError: If resolved widths and padding do not add up to
            ``width`` (a row of only fixed columns that leaves space unused).
    """

    if not columns:
        raise EmptyRowError(table_name)

    pads = (len(columns) + 1) * 2 * padding_unit
    asked = sum(column for column in columns if column is not None)
    unknown = sum(1 for column in columns if column is None)
    if width < pads + asked + unknown:
        raise RowTooWideError(table_name, width=width, pads=pads, asked=asked, unknown=unknown)

    leftover = width - pads - asked
    if unknown:
        share, extra = divmod(leftover, unknown)
    else:
        share, extra = 0, 0

    resolved: List[int] = []
    auto_index = 0
    for column in columns:
        if column is not None:
            resolved.append(column)
            continue
        resolved.append(share + (1 if auto_index < extra else 0))
        auto_index += 1

    if sum(resolved) + pads != width:
        raise RowWidthMismatchError(table_name, width=width, pads=pads, resolved=sum(resolved))
    return resolved


def compile_fixed_row(table: TableConf, width: int, columns: Sequence[Optional[int]]) -> CompiledRow:
    """Compile a row of a fixed-width table; values are placed in column order."""

    unit = table.padding_unit
    widths = resolve_fixed_widths(table.name, width, columns, unit)
    prefix = table.row_prefix(len(table.rows))
    classes = [f"{prefix}_c{index}" for index in range(len(widths))]

    styles = "".join(
        (
            _rule(classes, f"padding: {unit * 2}px; float: left;"),
            _rule(classes[:-1], f"padding-right: {unit}px;"),
            _rule(classes[1:], f"padding-left: {unit}px;"),
            *(f".{css_class} {{ width: {column_width}px; }}\n" for css_class, column_width in zip(classes, widths)),
        )
    )

    fragments = [
        f"<div class='{css_class}'>" if index == 0 else f"</div>\n<div class='{css_class}'>"
        for index, css_class in enumerate(classes)
    ]
    fragments.append("</div>\n")

    logger.debug("Compiled fixed row %s with widths %s", prefix, widths)
    return CompiledRow(styles=styles, fragments=tuple(fragments))


def compile_soft_row(table: TableConf, min_width: int, columns: Sequence[SoftColumn]) -> CompiledRow:
    """Compile a row of a soft table from exactly one soft column."""

    if not columns:
        raise EmptySoftColumnError(table.name)
    if len(columns) > 1:
        # Several flexible columns per row need a width-sharing rule that does not exist yet.
        raise MultipleSoftColumnsError(table.name, len(columns))

    unit = table.padding_unit
    prefix = table.row_prefix(len(table.rows))
    root = plan_soft_column(columns[0].subcolumns, min_width, unit, table.name)
    layout = flatten_layout(root, prefix)

    styles = layout.styles + _rule(
        layout.leaves, f"padding-top: {unit * 2}px; padding-bottom: {unit * 2}px;"
    )

    value_map: Optional[tuple[int, ...]] = tuple(layout.value_map)
    if value_map == tuple(range(len(layout.value_map))):
        value_map = None

    logger.debug("Compiled soft row %s with value map %s", prefix, value_map)
    return CompiledRow(styles=styles, fragments=tuple(layout.fragments), value_map=value_map)
