import pytest

from src.divtable.table import (
    EmptySoftColumnError,
    InvalidFlexSlotCountError,
    MinWidthTooSmallError,
    MultipleSoftColumnsError,
    RowKindMismatchError,
    SoftColumn,
    TableBuilder,
    TableDrawer,
)
from src.divtable.table.tree import Band, FixedGroup, FlexCell, plan_soft_column


def test_fixed_columns_on_both_sides_of_the_flexible_cell(builder: TableBuilder, drawer: TableDrawer) -> None:
    table = builder.table_soft("s", 742)
    row = builder.create_row_soft(table, [SoftColumn([150, None, 40])])
    compiled = builder.compiled(row)

    assert compiled.styles == (
        ".s_r0_l { padding-left: 4px; padding-right: 2px; width: 150px; float: left; overflow: hidden; }\n"
        ".s_r0_r_r { padding-left: 2px; padding-right: 4px; width: 40px; float: right; overflow: hidden; }\n"
        ".s_r0_r_l { padding-left: 2px; padding-right: 2px; min-width: 536px; margin-right: 46px; overflow: hidden; }\n"
        ".s_r0_r { min-width: 586px; margin-left: 156px; overflow: hidden; }\n"
        ".s_r0_l, .s_r0_r_r, .s_r0_r_l { padding-top: 4px; padding-bottom: 4px; }\n"
    )
    assert compiled.value_map == (0, 2, 1)
    assert compiled.insertion_points == 3

    html = builder.row(row, "line", ["A", "B", "C"], drawer)

    # The right cell floats ahead of the flexible one, so "C" precedes "B" in markup.
    assert html == (
        "<div class='line'>\n"
        "<div class='s_r0_l'>A</div>\n"
        "<div class='s_r0_r'>\n"
        "<div class='row'>\n"
        "<div class='s_r0_r_r'>C</div>\n"
        "<div class='s_r0_r_l'>B</div>\n"
        "</div>\n"
        "</div>\n"
        "</div>"
    )


def test_single_flexible_cell(builder: TableBuilder, drawer: TableDrawer) -> None:
    table = builder.table_soft("t", 100)
    row = builder.create_row_soft(table, [SoftColumn([None])])
    compiled = builder.compiled(row)

    assert compiled.styles == (
        ".t_r0 { padding-left: 4px; padding-right: 4px; min-width: 92px; margin-left: 0px; overflow: hidden; }\n"
        ".t_r0 { padding-top: 4px; padding-bottom: 4px; }\n"
    )
    assert compiled.fragments == ("<div class='t_r0'>", "</div>\n")
    assert compiled.value_map is None
    assert builder.row(row, "x", ["only"], drawer) == "<div class='x'>\n<div class='t_r0'>only</div>\n</div>"


def test_right_group_is_emitted_before_the_flexible_cell(builder: TableBuilder, drawer: TableDrawer) -> None:
    table = builder.table_soft("p", 200)
    row = builder.create_row_soft(table, [SoftColumn([None, 30])])
    compiled = builder.compiled(row)

    assert compiled.fragments == ("<div class='p_r0_r'>", "</div>\n<div class='p_r0_l'>", "</div>\n")
    assert compiled.value_map == (1, 0)
    assert "min-width: 158px; margin-right: 36px;" in compiled.styles
    assert builder.row(row, "x", ["text", "num"], drawer) == (
        "<div class='x'>\n<div class='p_r0_r'>num</div>\n<div class='p_r0_l'>text</div>\n</div>"
    )


def test_left_group_keeps_value_order(builder: TableBuilder) -> None:
    table = builder.table_soft("p", 200)
    row = builder.create_row_soft(table, [SoftColumn([30, None])])
    compiled = builder.compiled(row)

    assert compiled.value_map is None
    assert ".p_r0_l { padding-left: 4px; padding-right: 2px; width: 30px; float: left; overflow: hidden; }\n" in compiled.styles
    assert ".p_r0_r { padding-left: 2px; padding-right: 4px; min-width: 158px; margin-left: 36px; overflow: hidden; }\n" in compiled.styles


def test_multi_cell_group_is_wrapped_in_its_own_element(builder: TableBuilder, drawer: TableDrawer) -> None:
    table = builder.table_soft("p", 200)
    builder.set_padding_unit(table, 1)
    row = builder.create_row_soft(table, [SoftColumn([10, 20, None])])
    compiled = builder.compiled(row)

    assert compiled.fragments == (
        "<div class='p_r0_l'>\n<div class='p_r0_l_c0'>",
        "</div>\n<div class='p_r0_l_c1'>",
        "</div>\n</div>\n<div class='p_r0_r'>",
        "</div>\n",
    )
    assert ".p_r0_l { width: 35px; float: left; overflow: hidden; }\n" in compiled.styles
    assert ".p_r0_l_c0, .p_r0_l_c1, .p_r0_r { padding-top: 2px; padding-bottom: 2px; }\n" in compiled.styles
    assert "EXTRA" not in builder.row(row, "x", ["a", "b", "c", "EXTRA"], drawer)


def test_plan_nests_a_band_for_groups_on_both_sides() -> None:
    root = plan_soft_column([150, None, 40], 742, 2, "s")

    assert isinstance(root.fixed, FixedGroup)
    assert root.fixed.size == 156
    inner = root.flex
    assert isinstance(inner, Band) and inner.nested
    assert (inner.min_width, inner.margin) == (586, 156)
    assert isinstance(inner.flex, FlexCell)
    assert inner.flex.min_width == 536
    assert root.count == 3


@pytest.mark.parametrize("subcolumns", [[10, 20], [None, 5, None]])
def test_soft_column_needs_exactly_one_flexible_slot(builder: TableBuilder, subcolumns) -> None:
    table = builder.table_soft("p", 200)

    with pytest.raises(InvalidFlexSlotCountError) as excinfo:
        builder.create_row_soft(table, [SoftColumn(subcolumns)])

    assert excinfo.value.slots == subcolumns.count(None)


@pytest.mark.parametrize(
    ("min_width", "subcolumns"),
    [
        (36, [30, None]),
        (40, [30, None]),
        (202, [150, None, 40]),
        (7, [None]),
    ],
)
def test_min_width_must_leave_room_for_the_flexible_cell(builder: TableBuilder, min_width, subcolumns) -> None:
    table = builder.table_soft("p", min_width)

    with pytest.raises(MinWidthTooSmallError):
        builder.create_row_soft(table, [SoftColumn(subcolumns)])


def test_soft_row_requires_one_soft_column(builder: TableBuilder) -> None:
    table = builder.table_soft("p", 200)

    with pytest.raises(EmptySoftColumnError):
        builder.create_row_soft(table, [])
    with pytest.raises(MultipleSoftColumnsError) as excinfo:
        builder.create_row_soft(table, [SoftColumn([None]), SoftColumn([None])])

    assert excinfo.value.count == 2
    assert builder.table(table).rows == []


def test_fixed_row_on_soft_table_is_a_kind_mismatch(builder: TableBuilder) -> None:
    table = builder.table_soft("p", 200)

    with pytest.raises(RowKindMismatchError):
        builder.create_row_fixed(table, [None])


def test_rows_of_one_table_get_distinct_class_prefixes(builder: TableBuilder) -> None:
    table = builder.table_soft("p", 200)
    first = builder.create_row_soft(table, [SoftColumn([None])])
    second = builder.create_row_soft(table, [SoftColumn([None])])

    assert builder.compiled(first).fragments[0] == "<div class='p_r0'>"
    assert builder.compiled(second).fragments[0] == "<div class='p_r1'>"
