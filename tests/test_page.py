from src.divtable.page import Block, HtmlProducer, Style, classed
from src.divtable.table import TableBuilder


def test_classed_wraps_value_in_span() -> None:
    assert classed("tab_count", 3) == "<span class='tab_count'>3</span>"


def test_style_render_and_option_replacement() -> None:
    style = Style("box").opt("width", "10px").opt("float", "left").opt("width", "12px")

    assert style.render() == ".box {    width: 12px;\n    float: left;\n}"
    assert Style("empty").render() == ""


def test_style_duplicate_copies_options() -> None:
    base = Style("a", [("color", "red")])
    copy = base.duplicate("b").opt("color", "blue")

    assert str(base) == ".a {    color: red;\n}"
    assert str(copy) == ".b {    color: blue;\n}"


def test_block_renders_attributes_text_and_children() -> None:
    block = (
        Block("outer")
        .id("main")
        .onclick("go();")
        .text("hello")
        .sub(Block("inner").text("x"))
    )

    assert block.render() == (
        "<div id='main' class='outer' onclick='go();'>hello<div class='inner'>x</div>\n</div>"
    )


def test_producer_renders_document_with_used_table_css() -> None:
    builder = TableBuilder()
    table = builder.table_fixed("t", 50)
    used = builder.create_row_fixed(table, [None])
    unused = builder.create_row_fixed(table, [None, None])

    producer = HtmlProducer().with_title("Page").with_styles("body { margin: 0; }").with_scripts("var a;")
    producer.push_script("var b;")
    producer.push_style(Style("extra").opt("color", "red"))
    producer.push_block(Block("content").text(builder.row(used, "line", ["v"], producer.drawer)))
    producer.add_tables(builder)

    html = producer.render()

    assert html.startswith("<html>\n<head>\n<title>\nPage\n</title>\n<style>\nbody { margin: 0; }\n")
    assert builder.compiled(used).styles in html
    assert ".t_r1_c0" not in html
    assert ".extra {    color: red;\n}\n" in html
    assert "<script>\nvar a;\nvar b;\n\n</script>\n" in html
    assert "<div class='content'><div class='line'>\n<div class='t_r0_c0'>v</div>\n</div></div>\n" in html
    assert html.endswith("</body>\n</html>\n")
    assert unused not in producer.drawer


def test_producer_without_rendered_rows_adds_no_table_css() -> None:
    builder = TableBuilder()
    table = builder.table_fixed("t", 50)
    builder.create_row_fixed(table, [None])
    producer = HtmlProducer()

    producer.add_tables(builder)

    assert producer.css == ""
