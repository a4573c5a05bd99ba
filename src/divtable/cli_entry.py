"""Click CLI wiring and entry points for divtable."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from src.config_loader import ConfigError, load_config
from src.datatypes import AppConfig
from src.divtable.project import (
    LayoutProject,
    compile_project,
    load_page_resources,
    render_page,
    render_rows,
)
from src.divtable.resources import ResourceManager
from src.divtable.table import TableDrawer, TableError

__all__ = ["cli", "main"]

logger = logging.getLogger("divtable")

_CONFIG_ARG = click.argument("config_path", type=click.Path(exists=True, dir_okay=False))


def _configure_logging(verbose: bool) -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _load(config_path: str) -> Tuple[AppConfig, LayoutProject]:
    """Load ``config_path`` and compile its tables, mapping failures to click errors."""

    try:
        cfg = load_config(config_path)
    except ConfigError as exc:
        raise click.ClickException(f"Config error: {exc}") from exc
    except OSError as exc:
        raise click.ClickException(f"Cannot read {config_path}: {exc}") from exc
    try:
        project = compile_project(cfg)
    except TableError as exc:
        raise click.ClickException(f"Table error: {exc}") from exc
    return cfg, project


@click.group()
@click.option("--verbose", is_flag=True, help="Show debug logging from the compiler and resource cache.")
def main(verbose: bool) -> None:
    """Compile fixed and soft div tables into CSS and HTML."""

    _configure_logging(verbose)


@main.command("check")
@_CONFIG_ARG
def check_command(config_path: str) -> None:
    """Compile every table and print a summary."""

    cfg, project = _load(config_path)
    summary = Table(title=f"Tables in {Path(config_path).name}")
    summary.add_column("Table")
    summary.add_column("Layout")
    summary.add_column("Row")
    summary.add_column("Insertion points", justify="right")
    for table in cfg.tables:
        layout = f"{table.kind.value} {table.width}px"
        if not table.rows:
            summary.add_row(table.name, layout, "-", "-")
        for row in table.rows:
            compiled = project.builder.compiled(project.rows[(table.name, row.name)])
            summary.add_row(table.name, layout, row.name, str(compiled.insertion_points))
    Console().print(summary)
    click.echo(f"OK: {len(project.tables)} tables, {len(project.rows)} rows compiled.")


@main.command("css")
@_CONFIG_ARG
@click.option("--all", "all_rows", is_flag=True, help="Emit CSS for every compiled row, not only rendered ones.")
def css_command(config_path: str, all_rows: bool) -> None:
    """Print the CSS of rows listed under [[render]]."""

    cfg, project = _load(config_path)
    drawer = TableDrawer()
    if all_rows:
        for ref in project.rows.values():
            drawer.add(ref)
    else:
        render_rows(project, cfg.render, drawer)
    click.echo(project.builder.styles(drawer), nl=False)


def _write_output(html: str, output: Optional[str]) -> None:
    if output is None:
        click.echo(html, nl=False)
        return
    try:
        Path(output).write_text(html, encoding="utf-8")
    except OSError as exc:
        raise click.ClickException(f"Cannot write {output}: {exc}") from exc


@main.command("render")
@_CONFIG_ARG
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False), help="Write the page here instead of stdout.")
@click.option(
    "--watch/--no-watch",
    default=None,
    help="Keep running and re-render when stylesheets or scripts change (overrides [resources].watch).",
)
def render_command(config_path: str, output: Optional[str], watch: Optional[bool]) -> None:
    """Render the configured page to HTML."""

    cfg, project = _load(config_path)
    base_dir = Path(config_path).resolve().parent
    watching = cfg.resources.watch if watch is None else watch
    if watching and output is None:
        raise click.ClickException("--watch requires --output.")

    with ResourceManager(cfg.resources.poll_interval_seconds) as manager:
        try:
            resources = load_page_resources(manager, cfg, base_dir, watch=watching)
        except OSError as exc:
            raise click.ClickException(f"Cannot load page resource: {exc}") from exc
        html = render_page(project, cfg, base_dir, resources=resources)
        _write_output(html, output)
        if not watching:
            return

        click.echo(f"Watching resources for {output}; press Ctrl+C to stop.")
        try:
            while True:
                time.sleep(cfg.resources.poll_interval_seconds)
                updated = render_page(project, cfg, base_dir, resources=resources)
                if updated != html:
                    html = updated
                    _write_output(html, output)
                    logger.info("Re-rendered %s", output)
                    click.echo(f"Updated {output}")
        except KeyboardInterrupt:
            click.echo("Stopped watching.")


cli = main


if __name__ == "__main__":
    main()
