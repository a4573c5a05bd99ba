"""Configuration loader that parses and validates layout project TOML."""

from __future__ import annotations

import math
import re
import tomllib
from dataclasses import fields
from enum import Enum
from typing import Any, Dict, List, Optional

from .datatypes import (
    AppConfig,
    PageConfig,
    RenderConfig,
    ResourcesConfig,
    RowConfig,
    TabConfig,
    TableConfig,
    TableKind,
)


class ConfigError(ValueError):
    """Raised when the configuration file is malformed or fails validation."""


_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
_FLEX_MARKERS = {"auto", "flex", "*"}


def _coerce_bool(value: Any, dotted_key: str) -> bool:
    """Return a bool, coercing simple 0/1 representations when necessary."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"0", "1"}:
            return normalized == "1"
        if normalized in {"true", "false"}:
            return normalized == "true"
    raise ConfigError(f"{dotted_key} must be a boolean (use true/false).")


def _coerce_enum(value: Any, dotted_key: str, enum_type: type[Enum]) -> Enum:
    """Return an enum member, coercing string values case-insensitively."""

    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        for member in enum_type:
            member_value = str(member.value).lower()
            if normalized == member_value:
                return member
    raise ConfigError(
        f"{dotted_key} must be one of: {', '.join(str(member.value) for member in enum_type)}"
    )


def _coerce_int(value: Any, dotted_key: str, *, minimum: int = 0) -> int:
    """Return an integer no smaller than ``minimum``; booleans are rejected."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{dotted_key} must be an integer")
    if value < minimum:
        raise ConfigError(f"{dotted_key} must be >= {minimum}")
    return value


def _sanitize_section(raw: dict[str, Any], name: str, cls):
    """
    Coerce a raw TOML table into an instance of ``cls`` with cleaned booleans and enums.

    Parameters:
        raw (dict[str, Any]): Raw TOML section data.
        name (str): Section name used when reporting validation errors.
        cls: Dataclass type used to construct the section object.

    Returns:
        Any: Instantiated dataclass populated with values from ``raw``.

    Raises:
        ConfigError: If the section is not a table or contains invalid keys or values.
    """
    if not isinstance(raw, dict):
        raise ConfigError(f"[{name}] must be a table")
    cleaned: Dict[str, Any] = {}
    cls_fields = {field.name: field for field in fields(cls)}
    bool_fields = {field_name for field_name, field in cls_fields.items() if field.type in (bool, "bool")}
    enum_fields = {
        field_name: field.type
        for field_name, field in cls_fields.items()
        if isinstance(field.type, type) and issubclass(field.type, Enum)
    }
    for key, value in raw.items():
        if key in bool_fields:
            cleaned[key] = _coerce_bool(value, f"{name}.{key}")
        elif key in enum_fields:
            cleaned[key] = _coerce_enum(value, f"{name}.{key}", enum_fields[key])
        else:
            cleaned[key] = value
    try:
        return cls(**cleaned)
    except TypeError as exc:
        raise ConfigError(f"Invalid keys in [{name}]: {exc}") from exc


def _table_list(raw: Any, name: str) -> List[dict[str, Any]]:
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(entry, dict) for entry in raw):
        raise ConfigError(f"[[{name}]] must be an array of tables")
    return raw


def _string_list(raw: Any, dotted_key: str) -> List[str]:
    if not isinstance(raw, list) or not all(isinstance(entry, str) for entry in raw):
        raise ConfigError(f"{dotted_key} must be a list of strings")
    return list(raw)


def _parse_column(value: Any, dotted_key: str) -> Optional[int]:
    """Return a column width, or ``None`` for an auto/flexible marker."""

    if isinstance(value, str) and value.strip().lower() in _FLEX_MARKERS:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{dotted_key} must be an integer width or one of: auto, flex, *")
    if value < 0:
        raise ConfigError(f"{dotted_key} must be >= 0")
    return value


def _parse_rows(raw: Any, table_name: str) -> List[RowConfig]:
    rows: List[RowConfig] = []
    seen: set[str] = set()
    for index, entry in enumerate(_table_list(raw, f"tables.{table_name}.rows")):
        row = _sanitize_section(entry, f"tables.{table_name}.rows.{index}", RowConfig)
        row.name = str(row.name).strip() or str(index)
        if row.name in seen:
            raise ConfigError(f"tables.{table_name}: duplicate row name '{row.name}'")
        seen.add(row.name)
        dotted = f"tables.{table_name}.rows.{row.name}.columns"
        if not isinstance(row.columns, list):
            raise ConfigError(f"{dotted} must be a list")
        row.columns = [
            _parse_column(value, f"{dotted}[{position}]") for position, value in enumerate(row.columns)
        ]
        if row.percentage is not None:
            row.percentage = _coerce_int(row.percentage, f"tables.{table_name}.rows.{row.name}.percentage")
        rows.append(row)
    return rows


def _parse_tables(raw: Any) -> List[TableConfig]:
    tables: List[TableConfig] = []
    seen: set[str] = set()
    for index, entry in enumerate(_table_list(raw, "tables")):
        section = dict(entry)
        rows_raw = section.pop("rows", None)
        table = _sanitize_section(section, f"tables.{index}", TableConfig)
        name = str(table.name).strip()
        if not name:
            raise ConfigError(f"tables.{index}.name must be set")
        if not _IDENTIFIER_RE.match(name):
            raise ConfigError(f"tables.{index}.name '{name}' must be a valid CSS class name")
        if name in seen:
            raise ConfigError(f"Duplicate table name '{name}'")
        seen.add(name)
        table.name = name
        table.width = _coerce_int(table.width, f"tables.{name}.width", minimum=1)
        table.padding_unit = _coerce_int(table.padding_unit, f"tables.{name}.padding_unit")
        table.rows = _parse_rows(rows_raw, name)
        tables.append(table)
    return tables


def _parse_render(raw: Any, tables: List[TableConfig]) -> List[RenderConfig]:
    known = {(table.name, row.name) for table in tables for row in table.rows}
    entries: List[RenderConfig] = []
    for index, entry in enumerate(_table_list(raw, "render")):
        section = dict(entry)
        if "class" in section:
            section["css_class"] = section.pop("class")
        render = _sanitize_section(section, f"render.{index}", RenderConfig)
        table_name, sep, row_name = str(render.row).partition(".")
        if not sep or (table_name, row_name) not in known:
            raise ConfigError(f"render.{index}.row '{render.row}' must name an existing table.row")
        if not isinstance(render.values, list):
            raise ConfigError(f"render.{index}.values must be a list")
        render.values = [str(value) for value in render.values]
        render.css_class = str(render.css_class).strip() or f"{table_name}_{row_name}"
        entries.append(render)
    return entries


def _parse_page(raw: Any) -> PageConfig:
    if not isinstance(raw, dict):
        raise ConfigError("[page] must be a table")
    section = dict(raw)
    tabs_raw = section.pop("tabs", None)
    page = _sanitize_section(section, "page", PageConfig)
    page.stylesheets = _string_list(page.stylesheets, "page.stylesheets")
    page.scripts = _string_list(page.scripts, "page.scripts")
    page.tabs = []
    for index, entry in enumerate(_table_list(tabs_raw, "page.tabs")):
        tab = _sanitize_section(entry, f"page.tabs.{index}", TabConfig)
        if not str(tab.name).strip():
            raise ConfigError(f"page.tabs.{index}.name must be set")
        tab.count = _coerce_int(tab.count, f"page.tabs.{index}.count")
        page.tabs.append(tab)
    return page


def load_config(path: str) -> AppConfig:
    """
    Load and validate a layout project from a TOML file.

    Reads the file at `path`, parses it as UTF-8 TOML (BOM is accepted), validates the page, resources, tables and render sections, and returns a fully populated AppConfig.

    Returns:
        AppConfig: The validated configuration.

    Raises:
        ConfigError: If the file is not UTF-8, TOML parsing fails, or any validation rule is violated.
    """

    with open(path, "rb") as handle:
        raw_bytes = handle.read()
    if raw_bytes.startswith(b"\xef\xbb\xbf"):
        raw_bytes = raw_bytes[3:]
    try:
        raw = tomllib.loads(raw_bytes.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise ConfigError("Configuration file must be UTF-8 encoded") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse TOML: {exc}") from exc

    tables = _parse_tables(raw.get("tables"))
    app = AppConfig(
        page=_parse_page(raw.get("page", {})),
        resources=_sanitize_section(raw.get("resources", {}), "resources", ResourcesConfig),
        tables=tables,
        render=_parse_render(raw.get("render"), tables),
    )

    try:
        interval = float(app.resources.poll_interval_seconds)
    except (TypeError, ValueError) as exc:
        raise ConfigError("resources.poll_interval_seconds must be a number") from exc
    if not math.isfinite(interval) or interval <= 0:
        raise ConfigError("resources.poll_interval_seconds must be a finite number > 0")
    app.resources.poll_interval_seconds = interval

    if app.page.active_tab and app.page.active_tab not in {tab.name for tab in app.page.tabs}:
        raise ConfigError(f"page.active_tab '{app.page.active_tab}' does not match any tab")

    for table in app.tables:
        if table.kind is TableKind.SOFT:
            for row in table.rows:
                if sum(1 for column in row.columns if column is None) != 1:
                    raise ConfigError(
                        f"tables.{table.name}.rows.{row.name}.columns must contain exactly one flex slot"
                    )

    return app
