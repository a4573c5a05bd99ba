"""Minimal HTML page assembly: class styles, nested blocks, and the page document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from src.divtable.table import TableBuilder, TableDrawer

__all__ = [
    "Block",
    "HtmlProducer",
    "Style",
    "classed",
]


def classed(css_class: str, value: object) -> str:
    """Wrap ``value`` in a span carrying ``css_class``."""

    return f"<span class='{css_class}'>{value}</span>"


class Style:
    """A single class rule built from ordered ``property: value`` pairs."""

    def __init__(self, name: str, options: Optional[List[Tuple[str, str]]] = None) -> None:
        self.name = name
        self.options: List[Tuple[str, str]] = list(options or [])

    def duplicate(self, name: str) -> "Style":
        return Style(name, self.options)

    def opt(self, key: str, value: str) -> "Style":
        """Set ``key`` to ``value``, keeping its original position when already present."""

        for index, (existing, _) in enumerate(self.options):
            if existing == key:
                self.options[index] = (key, value)
                return self
        self.options.append((key, value))
        return self

    def render(self) -> str:
        if not self.options:
            return ""
        body = "".join(f"    {key}: {value};\n" for key, value in self.options)
        return f".{self.name} {{{body}}}"

    def __str__(self) -> str:
        return self.render()


def _block_list() -> List["Block"]:
    return []


@dataclass
class Block:
    """A ``div`` with a class, optional id and click handler, text, and child blocks."""

    css_class: str
    element_id: Optional[str] = None
    on_click: Optional[str] = None
    content: Optional[str] = None
    children: List["Block"] = field(default_factory=_block_list)

    def id(self, value: object) -> "Block":
        self.element_id = str(value)
        return self

    def onclick(self, value: object) -> "Block":
        self.on_click = str(value)
        return self

    def text(self, value: object) -> "Block":
        self.content = str(value)
        return self

    def sub(self, child: "Block") -> "Block":
        self.children.append(child)
        return self

    def add(self, child: "Block") -> None:
        self.children.append(child)

    def render(self) -> str:
        attributes = ""
        if self.element_id is not None:
            attributes += f"id='{self.element_id}' "
        attributes += f"class='{self.css_class}'"
        if self.on_click is not None:
            attributes += f" onclick='{self.on_click}'"
        inner = self.content or ""
        inner += "".join(f"{child.render()}\n" for child in self.children)
        return f"<div {attributes}>{inner}</div>"

    def __str__(self) -> str:
        return self.render()


class HtmlProducer:
    """
    Collects the pieces of one page and renders the final document.

    The producer owns the :class:`TableDrawer` for its render pass; rows
    rendered through :attr:`drawer` decide which table CSS
    :meth:`add_tables` pulls in.
    """

    def __init__(self) -> None:
        self.title = ""
        self.css = ""
        self.js = ""
        self.scripts: List[str] = []
        self.style_rules: List[Style] = []
        self.blocks: List[Block] = []
        self.drawer = TableDrawer()

    def with_title(self, title: object) -> "HtmlProducer":
        self.title = str(title)
        return self

    def with_styles(self, css: str) -> "HtmlProducer":
        self._append_css(css)
        return self

    def with_scripts(self, js: str) -> "HtmlProducer":
        if self.js:
            self.js += "\n"
        self.js += js
        return self

    def _append_css(self, css: str) -> None:
        if self.css:
            self.css += "\n"
        self.css += css

    def push_script(self, script: object) -> None:
        self.scripts.append(str(script))

    def push_style(self, style: Style) -> None:
        self.style_rules.append(style)

    def push_block(self, block: Block) -> None:
        self.blocks.append(block)

    def add_tables(self, builder: TableBuilder) -> None:
        """Append the CSS of every table row rendered with this producer's drawer."""

        css = builder.styles(self.drawer)
        if css:
            self._append_css(css)

    def render(self) -> str:
        style = self.css + "\n" + "".join(f"{rule.render()}\n" for rule in self.style_rules)
        body = "".join(f"{block.render()}\n" for block in self.blocks)
        script = self.js + "\n" + "".join(f"{entry}\n" for entry in self.scripts)
        return (
            "<html>\n<head>\n"
            f"<title>\n{self.title}\n</title>\n"
            f"<style>\n{style}\n</style>\n"
            f"<script>\n{script}\n</script>\n"
            "</head>\n<body>\n"
            f"{body}\n"
            "</body>\n</html>\n"
        )

    def __str__(self) -> str:
        return self.render()
