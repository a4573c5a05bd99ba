from pathlib import Path
from typing import Callable

import pytest

from src.config_loader import ConfigError, load_config
from src.datatypes import TableKind

WriteConfig = Callable[..., Path]

_FULL = """
[page]
title = "Inventory"
stylesheets = ["base.css"]
active_tab = "locations"

[[page.tabs]]
name = "locations"
count = 3
href = "/locations"

[[page.tabs]]
name = "items"
href = "/items"

[resources]
poll_interval_seconds = 0.5
watch = "true"

[[tables]]
name = "locs"
kind = "fixed"
width = 250

[[tables.rows]]
name = "body"
columns = ["auto", 44, 44]

[[tables]]
name = "lines"
kind = "SOFT"
width = 742
padding_unit = 1

[[tables.rows]]
columns = [150, "flex", 40]

[[render]]
row = "locs.body"
class = "locs_line"
values = ["Row1", 1, 10]

[[render]]
row = "lines.0"
values = ["a"]
"""


def test_load_full_config(write_config: WriteConfig) -> None:
    cfg = load_config(str(write_config(_FULL)))

    assert cfg.page.title == "Inventory"
    assert cfg.page.stylesheets == ["base.css"]
    assert [tab.name for tab in cfg.page.tabs] == ["locations", "items"]
    assert cfg.page.tabs[0].count == 3
    assert cfg.resources.poll_interval_seconds == 0.5
    assert cfg.resources.watch is True

    locs, lines = cfg.tables
    assert locs.kind is TableKind.FIXED
    assert locs.padding_unit == 2
    assert locs.rows[0].columns == [None, 44, 44]
    assert lines.kind is TableKind.SOFT
    assert lines.padding_unit == 1
    assert lines.rows[0].name == "0"
    assert lines.rows[0].columns == [150, None, 40]

    assert cfg.render[0].css_class == "locs_line"
    assert cfg.render[0].values == ["Row1", "1", "10"]
    assert cfg.render[1].css_class == "lines_0"


def test_defaults_for_empty_file(write_config: WriteConfig) -> None:
    cfg = load_config(str(write_config("")))

    assert cfg.tables == []
    assert cfg.render == []
    assert cfg.page.title == ""
    assert cfg.resources.poll_interval_seconds == 1.0
    assert cfg.resources.watch is False


def test_utf8_bom_is_accepted(tmp_path: Path) -> None:
    path = tmp_path / "bom.toml"
    path.write_bytes(b"\xef\xbb\xbf[page]\ntitle = \"B\"\n")

    assert load_config(str(path)).page.title == "B"


def test_non_utf8_file_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "latin.toml"
    path.write_bytes(b"[page]\ntitle = \"\xe9\"\n")

    with pytest.raises(ConfigError, match="UTF-8"):
        load_config(str(path))


def test_invalid_toml_is_reported(write_config: WriteConfig) -> None:
    with pytest.raises(ConfigError, match="Failed to parse TOML"):
        load_config(str(write_config("[page\n")))


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ('[[tables]]\nname = "a"\nwidth = 10\n[[tables]]\nname = "a"\nwidth = 10\n', "Duplicate table name"),
        ('[[tables]]\nname = "has space"\nwidth = 10\n', "valid CSS class name"),
        ('[[tables]]\nwidth = 10\n', "name must be set"),
        ('[[tables]]\nname = "a"\nwidth = 0\n', "width must be >= 1"),
        ('[[tables]]\nname = "a"\nwidth = true\n', "width must be an integer"),
        ('[[tables]]\nname = "a"\nwidth = 10\npadding_unit = -1\n', "padding_unit must be >= 0"),
        ('[[tables]]\nname = "a"\nkind = "grid"\nwidth = 10\n', "must be one of: fixed, soft"),
        ('[[tables]]\nname = "a"\nwidth = 10\ncolour = "red"\n', "Invalid keys in \\[tables.0\\]"),
        (
            '[[tables]]\nname = "a"\nwidth = 10\n[[tables.rows]]\nname = "r"\ncolumns = [1]\n'
            '[[tables.rows]]\nname = "r"\ncolumns = [1]\n',
            "duplicate row name 'r'",
        ),
        ('[[tables]]\nname = "a"\nwidth = 10\n[[tables.rows]]\ncolumns = ["wide"]\n', "integer width or one of"),
        ('[[tables]]\nname = "a"\nwidth = 10\n[[tables.rows]]\ncolumns = [-3]\n', "must be >= 0"),
        (
            '[[tables]]\nname = "a"\nkind = "soft"\nwidth = 10\n[[tables.rows]]\ncolumns = [1, 2]\n',
            "exactly one flex slot",
        ),
        ('[[render]]\nrow = "missing.row"\n', "must name an existing table.row"),
        ('[[render]]\nrow = "norow"\n', "must name an existing table.row"),
        ("[resources]\npoll_interval_seconds = 0\n", "finite number > 0"),
        ('[resources]\nwatch = "maybe"\n', "must be a boolean"),
        ('[page]\nactive_tab = "ghost"\n', "does not match any tab"),
        ('[page]\nstylesheets = "base.css"\n', "list of strings"),
        ("page = 3\n", "\\[page\\] must be a table"),
        ("tables = 3\n", "must be an array of tables"),
    ],
)
def test_validation_errors(write_config: WriteConfig, text: str, message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        load_config(str(write_config(text)))


def test_zero_padding_unit_is_accepted(write_config: WriteConfig) -> None:
    cfg = load_config(str(write_config('[[tables]]\nname = "a"\nwidth = 10\npadding_unit = 0\n')))

    assert cfg.tables[0].padding_unit == 0
