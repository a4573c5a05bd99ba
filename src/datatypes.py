"""Configuration dataclasses for divtable layout projects."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class TableKind(str, Enum):
    """Column strategies supported by the table compiler."""

    FIXED = "fixed"
    SOFT = "soft"


@dataclass
class RowConfig:
    """One row declaration; ``None`` columns are auto (fixed) or flexible (soft)."""

    name: str = ""
    columns: List[Optional[int]] = field(default_factory=list)
    percentage: Optional[int] = None


@dataclass
class TableConfig:
    """A named table, its layout strategy, and its rows."""

    name: str = ""
    kind: TableKind = TableKind.FIXED
    width: int = 0
    padding_unit: int = 2
    rows: List[RowConfig] = field(default_factory=list)


@dataclass
class RenderConfig:
    """A row rendered into the page with the given values."""

    row: str = ""
    css_class: str = ""
    values: List[str] = field(default_factory=list)


@dataclass
class TabConfig:
    """One entry of the page tab strip."""

    name: str = ""
    count: int = 0
    active: bool = False
    href: str = ""


@dataclass
class PageConfig:
    """Document-level settings for rendered pages."""

    title: str = ""
    stylesheets: List[str] = field(default_factory=list)
    scripts: List[str] = field(default_factory=list)
    tabs: List[TabConfig] = field(default_factory=list)
    active_tab: str = ""


@dataclass
class ResourcesConfig:
    """Resource loading and file-watch behaviour."""

    poll_interval_seconds: float = 1.0
    watch: bool = False


@dataclass
class AppConfig:
    """Aggregated configuration loaded from a project TOML file."""

    page: PageConfig = field(default_factory=PageConfig)
    resources: ResourcesConfig = field(default_factory=ResourcesConfig)
    tables: List[TableConfig] = field(default_factory=list)
    render: List[RenderConfig] = field(default_factory=list)
