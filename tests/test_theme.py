import pytest

from constants import PARTICLE_PALETTE_CONSTANTS
from storage import SettingsStore
from theme import ACCENT_OPTIONS, Theme, color_from_hex, parse_hex


@pytest.mark.parametrize("text, expected", [
    ("#3B8D85", (59, 141, 133)),
    ("3b8d85", (59, 141, 133)),
    ("  #c00000\n", (192, 0, 0)),
    ("#FFF", (0, 15, 255)),
    ("#12ZZ", (0, 0, 18)),
    ("not a colour", (0, 0, 0)),
    ("", (0, 0, 0)),
])
def test_parse_hex(text, expected):
    assert parse_hex(text) == expected


def test_color_from_hex_finds_known_options():
    assert color_from_hex("#E36C09").name == "Orange"


def test_color_from_hex_falls_back_to_teal():
    assert color_from_hex("#123456").name == "Teal"


def test_default_accent_is_teal(settings):
    theme = Theme(settings)
    assert theme.current_accent.name == "Teal"
    assert theme.accent_rgb == (59, 141, 133)


def test_set_accent_persists(tmp_path):
    path = str(tmp_path / "settings.json")
    purple = next(option for option in ACCENT_OPTIONS if option.name == "Purple")
    Theme(SettingsStore(path)).set_accent(purple)

    reloaded = Theme(SettingsStore(path))
    assert reloaded.current_accent == purple
    assert reloaded.accent_hex == "#8E7CC3"


def test_palette_is_accent_then_constants(settings):
    theme = Theme(settings)
    red = next(option for option in ACCENT_OPTIONS if option.name == "Red")
    theme.set_accent(red)

    palette = theme.palette()

    assert palette[0] == (192, 0, 0)
    assert palette[1:] == PARTICLE_PALETTE_CONSTANTS
    assert len(palette) == 4
