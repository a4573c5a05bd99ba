"""Compile a loaded configuration into tables and render its page."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from src.datatypes import AppConfig, RenderConfig, TableConfig, TableKind
from src.divtable.page import Block, HtmlProducer
from src.divtable.resources import Resource, ResourceManager
from src.divtable.table import RowRef, SoftColumn, TableBuilder, TableDrawer, TableError, TableRef
from src.divtable.tabs import Tab, Tabs

__all__ = [
    "LayoutProject",
    "PageResources",
    "compile_project",
    "load_page_resources",
    "render_page",
    "render_rows",
]

logger = logging.getLogger(__name__)


@dataclass
class LayoutProject:
    """A compiled builder plus lookups from configured names to handles."""

    builder: TableBuilder = field(default_factory=TableBuilder)
    tables: Dict[str, TableRef] = field(default_factory=dict)
    rows: Dict[Tuple[str, str], RowRef] = field(default_factory=dict)

    def row_ref(self, dotted: str) -> RowRef:
        """Resolve ``table.row`` to its compiled handle."""

        table_name, _, row_name = dotted.partition(".")
        try:
            return self.rows[(table_name, row_name)]
        except KeyError:
            raise KeyError(f"Unknown row '{dotted}'") from None


def _compile_table(project: LayoutProject, table: TableConfig) -> None:
    builder = project.builder
    if table.kind is TableKind.SOFT:
        ref = builder.table_soft(table.name, table.width)
    else:
        ref = builder.table_fixed(table.name, table.width)
    builder.set_padding_unit(ref, table.padding_unit)
    project.tables[table.name] = ref
    for row in table.rows:
        if table.kind is TableKind.SOFT:
            row_ref = builder.create_row_soft(ref, [SoftColumn(row.columns, row.percentage)])
        else:
            row_ref = builder.create_row_fixed(ref, row.columns)
        project.rows[(table.name, row.name)] = row_ref


def compile_project(cfg: AppConfig) -> LayoutProject:
    """
    Register and compile every configured table and row.

    Raises:
        TableError: The first table or row that fails to compile.
    """

    project = LayoutProject()
    for table in cfg.tables:
        try:
            _compile_table(project, table)
        except TableError:
            logger.debug("Compilation of table '%s' failed", table.name, exc_info=True)
            raise
    logger.debug("Compiled %d tables, %d rows", len(project.tables), len(project.rows))
    return project


def render_rows(project: LayoutProject, entries: List[RenderConfig], drawer: TableDrawer) -> List[str]:
    """Fill each configured row with its values, recording usage in ``drawer``."""

    return [
        project.builder.row(project.row_ref(entry.row), entry.css_class, entry.values, drawer)
        for entry in entries
    ]


@dataclass
class PageResources:
    stylesheets: List[Resource] = field(default_factory=list)
    scripts: List[Resource] = field(default_factory=list)

    def css(self) -> str:
        return "\n".join(resource.get() for resource in self.stylesheets)

    def js(self) -> str:
        return "\n".join(resource.get() for resource in self.scripts)


def load_page_resources(
    manager: ResourceManager,
    cfg: AppConfig,
    base_dir: Path,
    *,
    watch: Optional[bool] = None,
) -> PageResources:
    """Register the page stylesheets and scripts, resolved against ``base_dir``."""

    updates = cfg.resources.watch if watch is None else watch
    return PageResources(
        stylesheets=[manager.register(base_dir / path, updates=updates) for path in cfg.page.stylesheets],
        scripts=[manager.register(base_dir / path, updates=updates) for path in cfg.page.scripts],
    )


def _tab_strip(cfg: AppConfig) -> Optional[Block]:
    if not cfg.page.tabs:
        return None
    tabs = Tabs(Tab(entry.name, entry.count, entry.active, entry.href) for entry in cfg.page.tabs)
    if cfg.page.active_tab:
        tabs.set_active(cfg.page.active_tab)
    return tabs.blocks()


def render_page(
    project: LayoutProject,
    cfg: AppConfig,
    base_dir: Path,
    *,
    resources: Optional[PageResources] = None,
) -> str:
    """
    Build the full HTML document for ``cfg``.

    Stylesheets and scripts are read through a :class:`ResourceManager` unless
    already loaded ``resources`` are passed in. Only the CSS of rows rendered
    on this page is included.
    """

    if resources is None:
        with ResourceManager(cfg.resources.poll_interval_seconds) as manager:
            resources = load_page_resources(manager, cfg, base_dir, watch=False)

    producer = HtmlProducer().with_title(cfg.page.title)
    css = resources.css()
    if css:
        producer.with_styles(css)
    js = resources.js()
    if js:
        producer.with_scripts(js)

    strip = _tab_strip(cfg)
    if strip is not None:
        producer.push_block(strip)

    content = Block("content")
    for markup in render_rows(project, cfg.render, producer.drawer):
        if markup:
            content.add(Block("table_row").text(markup))
    producer.push_block(content)

    producer.add_tables(project.builder)
    return producer.render()
