"""Tab strip widget rendered as page blocks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from src.divtable.page import Block, classed

__all__ = ["Tab", "Tabs"]


@dataclass
class Tab:
    name: str
    count: int = 0
    active: bool = False
    href: str = ""


class Tabs:
    def __init__(self, tabs: Iterable[Tab]) -> None:
        self.tabs: List[Tab] = list(tabs)

    def set_active(self, name: str) -> None:
        for tab in self.tabs:
            if tab.name == name:
                tab.active = True

    def _tab_block(self, tab: Tab) -> Block:
        label = tab.name
        if not tab.active and tab.count > 0:
            label += classed("tab_count", tab.count)
        else:
            label += classed("tab_count_empty", "&nbsp;")
        block = Block("tab_button_active" if tab.active else "tab_button").text(label)
        if not tab.active:
            block = block.onclick(f'tabClicked("{tab.href}");')
        return block

    def blocks(self) -> Block:
        """Return the strip: a ``tabs`` block holding one ``tab_row``."""

        row = Block("tab_row")
        for tab in self.tabs:
            row.add(self._tab_block(tab))
        row.add(Block("tab_finish").text("<img width=1 height=1>"))
        return Block("tabs").sub(row)
