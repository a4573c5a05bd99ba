"""
Layout tree for soft rows and its flattening into CSS and markup fragments.

A soft row is planned as a small tree built from three node kinds:

``FixedGroup``
    One or more fixed-width cells floated to one side of the flexible cell.
``FlexCell``
    The flexible cell itself. It does not float; a margin on the side of its
    neighbouring fixed group keeps it clear of that group.
``Band``
    Pairs an optional fixed group with a flexible part (a ``FlexCell`` or a
    nested ``Band``). A nested band carries its own minimum width and margin
    and is wrapped in its own element; this is how fixed groups on both sides
    of the flexible cell are expressed.

Flattening walks the tree once and produces the CSS rules, the ordered markup
fragments, the classes of every leaf cell, and the value map that tells the
renderer which caller value belongs at each insertion point. Right-floated
groups must precede the content they float next to, so their values appear
earlier in the markup than their logical position.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Sequence, Tuple, Union

from .errors import InvalidFlexSlotCountError, MinWidthTooSmallError

__all__ = [
    "Band",
    "FixedCell",
    "FixedGroup",
    "FlexCell",
    "FlattenedLayout",
    "LayoutNode",
    "flatten_layout",
    "plan_soft_column",
    "split_soft_column",
]

Side = Literal["left", "right"]

_CLOSE = "</div>\n"


@dataclass(frozen=True)
class FixedCell:
    padding_left: int
    padding_right: int
    width: int

    @property
    def size(self) -> int:
        return self.padding_left + self.padding_right + self.width


@dataclass(frozen=True)
class FixedGroup:
    side: Side
    cells: Tuple[FixedCell, ...]

    @property
    def size(self) -> int:
        return sum(cell.size for cell in self.cells)

    @property
    def count(self) -> int:
        return len(self.cells)


@dataclass(frozen=True)
class FlexCell:
    padding_left: int
    padding_right: int
    min_width: int
    margin: int = 0

    count = 1


@dataclass(frozen=True)
class Band:
    fixed: Optional[FixedGroup]
    flex: Union[FlexCell, "Band"]
    min_width: Optional[int] = None
    margin: int = 0

    @property
    def count(self) -> int:
        fixed_count = self.fixed.count if self.fixed is not None else 0
        return fixed_count + self.flex.count

    @property
    def nested(self) -> bool:
        return self.min_width is not None


LayoutNode = Union[FixedGroup, FlexCell, Band]


def _str_list() -> List[str]:
    return []


def _int_list() -> List[int]:
    return []


@dataclass
class FlattenedLayout:
    """Accumulated output of :func:`flatten_layout`."""

    rules: List[str] = field(default_factory=_str_list)
    leaves: List[str] = field(default_factory=_str_list)
    fragments: List[str] = field(default_factory=_str_list)
    value_map: List[int] = field(default_factory=_int_list)

    @property
    def styles(self) -> str:
        return "".join(self.rules)


def _open(css_class: str) -> str:
    return f"<div class='{css_class}'>"


def _wrap(css_class: str, fragments: List[str]) -> List[str]:
    """Enclose the whole fragment sequence in one more element."""

    if fragments:
        fragments[0] = f"<div class='{css_class}'>\n{fragments[0]}"
        fragments[-1] = f"{fragments[-1]}{_CLOSE}"
    return fragments


def _concat(left: List[str], right: List[str]) -> List[str]:
    """Join two fragment sequences without adding an insertion point at the seam."""

    if not left:
        return right
    last = left.pop()
    if right:
        right[0] = last + right[0]
    else:
        right.append(last)
    left.extend(right)
    return left


def _edge_padding(is_edge: bool, unit: int) -> int:
    return (2 if is_edge else 1) * unit


def _fixed_group(widths: Sequence[int], side: Side, on_edge: bool, unit: int) -> FixedGroup:
    """Build a fixed group; only the cell touching the table edge gets the double unit."""

    last = len(widths) - 1
    cells: List[FixedCell] = []
    for index, width in enumerate(widths):
        if side == "left":
            cell = FixedCell(
                padding_left=_edge_padding(index == 0 and on_edge, unit),
                padding_right=unit,
                width=width,
            )
        else:
            cell = FixedCell(
                padding_left=unit,
                padding_right=_edge_padding(index == last and on_edge, unit),
                width=width,
            )
        cells.append(cell)
    return FixedGroup(side=side, cells=tuple(cells))


def split_soft_column(
    subcolumns: Sequence[Optional[int]], table_name: str
) -> Tuple[List[int], List[int]]:
    """Partition sub-column widths around the single flexible slot."""

    left: List[int] = []
    right: List[int] = []
    slots = 0
    for width in subcolumns:
        if width is None:
            slots += 1
        elif slots == 0:
            left.append(width)
        else:
            right.append(width)
    if slots != 1:
        raise InvalidFlexSlotCountError(table_name, slots)
    return left, right


def _flex_cell(
    min_width: int,
    *,
    reserved: int,
    padding_left: int,
    padding_right: int,
    table_name: str,
    declared: int,
) -> FlexCell:
    inner = min_width - reserved - padding_left - padding_right
    if inner < 0:
        raise MinWidthTooSmallError(
            table_name,
            min_width=declared,
            reserved=declared - min_width + reserved + padding_left + padding_right,
        )
    return FlexCell(
        padding_left=padding_left,
        padding_right=padding_right,
        min_width=inner,
        margin=reserved,
    )


def plan_soft_column(
    subcolumns: Sequence[Optional[int]],
    min_width: int,
    unit: int,
    table_name: str,
    *,
    most_left: bool = True,
    most_right: bool = True,
) -> Band:
    """
    Plan the layout tree of one soft column.

    Parameters:
        subcolumns: Fixed widths with a single ``None`` marking the flexible slot.
        min_width: Minimum width of the horizontal band the column occupies.
        unit: Padding unit of the table.
        table_name: Used in error messages.
        most_left: Whether the band touches the table's left edge.
        most_right: Whether the band touches the table's right edge.

    Raises:
        InvalidFlexSlotCountError: If the column has zero or several flexible slots.
        MinWidthTooSmallError: If the fixed groups leave no room for the flexible cell.
    """

    left, right = split_soft_column(subcolumns, table_name)

    if not left and not right:
        flex = _flex_cell(
            min_width,
            reserved=0,
            padding_left=_edge_padding(most_left, unit),
            padding_right=_edge_padding(most_right, unit),
            table_name=table_name,
            declared=min_width,
        )
        return Band(fixed=None, flex=flex)

    if not left:
        group = _fixed_group(right, "right", most_right, unit)
        if min_width <= group.size:
            raise MinWidthTooSmallError(table_name, min_width=min_width, reserved=group.size)
        flex = _flex_cell(
            min_width,
            reserved=group.size,
            padding_left=_edge_padding(most_left, unit),
            padding_right=unit,
            table_name=table_name,
            declared=min_width,
        )
        return Band(fixed=group, flex=flex)

    if not right:
        group = _fixed_group(left, "left", most_left, unit)
        if min_width <= group.size:
            raise MinWidthTooSmallError(table_name, min_width=min_width, reserved=group.size)
        flex = _flex_cell(
            min_width,
            reserved=group.size,
            padding_left=unit,
            padding_right=_edge_padding(most_right, unit),
            table_name=table_name,
            declared=min_width,
        )
        return Band(fixed=group, flex=flex)

    left_group = _fixed_group(left, "left", most_left, unit)
    right_group = _fixed_group(right, "right", most_right, unit)
    reserved = left_group.size + right_group.size
    if min_width <= reserved:
        raise MinWidthTooSmallError(table_name, min_width=min_width, reserved=reserved)
    inner_width = min_width - left_group.size
    flex = _flex_cell(
        inner_width,
        reserved=right_group.size,
        padding_left=unit,
        padding_right=unit,
        table_name=table_name,
        declared=min_width,
    )
    inner = Band(fixed=right_group, flex=flex, min_width=inner_width, margin=left_group.size)
    return Band(fixed=left_group, flex=inner)


def _flatten_fixed(
    group: FixedGroup, out: FlattenedLayout, offset: int, prefix: str, side: Side
) -> List[str]:
    if group.count == 1:
        cell = group.cells[0]
        out.rules.append(
            f".{prefix} {{ padding-left: {cell.padding_left}px; padding-right: {cell.padding_right}px; "
            f"width: {cell.width}px; float: {side}; overflow: hidden; }}\n"
        )
        out.leaves.append(prefix)
        fragments = [_open(prefix), _CLOSE]
    else:
        fragments = []
        for index, cell in enumerate(group.cells):
            css_class = f"{prefix}_c{index}"
            out.rules.append(
                f".{css_class} {{ padding-left: {cell.padding_left}px; padding-right: {cell.padding_right}px; "
                f"width: {cell.width}px; overflow: hidden; float: left; }}\n"
            )
            out.leaves.append(css_class)
            fragments = _concat(fragments, [_open(css_class), _CLOSE])
        out.rules.append(f".{prefix} {{ width: {group.size}px; float: {side}; overflow: hidden; }}\n")
        fragments = _wrap(prefix, fragments)
    out.value_map.extend(range(offset, offset + group.count))
    return fragments


def _flatten_flex(
    cell: FlexCell, out: FlattenedLayout, offset: int, prefix: str, side: Side
) -> List[str]:
    out.rules.append(
        f".{prefix} {{ padding-left: {cell.padding_left}px; padding-right: {cell.padding_right}px; "
        f"min-width: {cell.min_width}px; margin-{side}: {cell.margin}px; overflow: hidden; }}\n"
    )
    out.leaves.append(prefix)
    out.value_map.append(offset)
    return [_open(prefix), _CLOSE]


def _flatten_band(band: Band, out: FlattenedLayout, offset: int, prefix: str, side: Side) -> List[str]:
    fixed = band.fixed
    if fixed is None:
        return _flatten(band.flex, out, offset, prefix, side)
    if fixed.side == "left":
        left = _flatten(fixed, out, offset, f"{prefix}_l", "left")
        right = _flatten(band.flex, out, offset + fixed.count, f"{prefix}_r", "left")
        fragments = _concat(left, right)
    else:
        right = _flatten(fixed, out, offset + band.flex.count, f"{prefix}_r", "right")
        left = _flatten(band.flex, out, offset, f"{prefix}_l", "right")
        fragments = _concat(right, left)
    if band.nested:
        out.rules.append(
            f".{prefix} {{ min-width: {band.min_width}px; margin-{side}: {band.margin}px; overflow: hidden; }}\n"
        )
        fragments = _wrap("row", fragments)
        fragments = _wrap(prefix, fragments)
    return fragments


def _flatten(node: LayoutNode, out: FlattenedLayout, offset: int, prefix: str, side: Side) -> List[str]:
    if isinstance(node, FixedGroup):
        return _flatten_fixed(node, out, offset, prefix, side)
    if isinstance(node, FlexCell):
        return _flatten_flex(node, out, offset, prefix, side)
    if isinstance(node, Band):
        return _flatten_band(node, out, offset, prefix, side)
    raise TypeError(f"Unsupported layout node: {type(node).__name__}")


def flatten_layout(root: LayoutNode, prefix: str) -> FlattenedLayout:
    """Flatten ``root`` into CSS rules, fragments, leaf classes, and the value map."""

    out = FlattenedLayout()
    out.fragments = _flatten(root, out, 0, prefix, "left")
    return out
