"""Public shim exposing the divtable CLI and library surface."""

from __future__ import annotations

from typing import Callable, cast

import src.divtable.cli_entry as _cli_entry
from src.config_loader import ConfigError, load_config
from src.divtable.page import Block, HtmlProducer, Style, classed
from src.divtable.project import LayoutProject, compile_project, render_page
from src.divtable.resources import Resource, ResourceManager
from src.divtable.table import (
    CompiledRow,
    RowRef,
    SoftColumn,
    TableBuilder,
    TableDrawer,
    TableError,
    TableRef,
)
from src.divtable.tabs import Tab, Tabs

__all__ = (
    "main",
    "cli",
    "Block",
    "CompiledRow",
    "ConfigError",
    "HtmlProducer",
    "LayoutProject",
    "Resource",
    "ResourceManager",
    "RowRef",
    "SoftColumn",
    "Style",
    "Tab",
    "TableBuilder",
    "TableDrawer",
    "TableError",
    "TableRef",
    "Tabs",
    "classed",
    "compile_project",
    "load_config",
    "render_page",
)


main = _cli_entry.main
cli = getattr(_cli_entry, "cli", main)


if __name__ == "__main__":
    _entry_point = cast(Callable[[], None], main)
    _entry_point()
