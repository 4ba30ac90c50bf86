# theme.py
"""
Accent colour selection and the particle palette derived from it.

The chosen accent is persisted in the settings store under
``accentColorHex``. The particle field reads `Theme.palette()` once per
populate, so changing the accent recolours the background on the next
re-seed rather than immediately.
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Tuple

from constants import ACCENT_COLORS, DEFAULT_ACCENT_HEX, PARTICLE_PALETTE_CONSTANTS
from storage import SettingsStore

ACCENT_KEY = "accentColorHex"

_HEX_PREFIX = re.compile(r"[0-9A-F]+")


def parse_hex(text: str) -> Tuple[int, int, int]:
    """
    Parses '#RRGGBB' (or 'RRGGBB') into an RGB tuple.

    Surrounding whitespace and case are ignored. Only the leading run of hex
    digits is read; text with none parses as black.
    """
    cleaned = text.strip().upper()
    if cleaned.startswith("#"):
        cleaned = cleaned[1:]
    match = _HEX_PREFIX.match(cleaned)
    value = int(match.group(0), 16) if match else 0
    return ((value & 0xFF0000) >> 16, (value & 0x00FF00) >> 8, value & 0x0000FF)


@dataclass(frozen=True)
class ColorOption:
    name: str
    hex: str

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return parse_hex(self.hex)


ACCENT_OPTIONS: List[ColorOption] = [ColorOption(name, hex_value) for name, hex_value in ACCENT_COLORS]


def color_from_hex(hex_value: str) -> ColorOption:
    """Returns the accent option with this hex, falling back to the default (Teal)."""
    for option in ACCENT_OPTIONS:
        if option.hex == hex_value:
            return option
    return ACCENT_OPTIONS[0]


class Theme:
    """Persisted accent colour on top of a SettingsStore."""

    def __init__(self, settings: SettingsStore):
        self.settings = settings

    @property
    def accent_hex(self) -> str:
        return self.settings.get(ACCENT_KEY, DEFAULT_ACCENT_HEX)

    @property
    def current_accent(self) -> ColorOption:
        return color_from_hex(self.accent_hex)

    @property
    def accent_rgb(self) -> Tuple[int, int, int]:
        return parse_hex(self.accent_hex)

    def set_accent(self, option: ColorOption) -> None:
        self.settings.set(ACCENT_KEY, option.hex)
        logging.info(f"Accent colour set to {option.name} ({option.hex}).")

    def palette(self) -> List[Tuple[int, int, int]]:
        """Current accent first, then the fixed background colours."""
        return [self.accent_rgb] + list(PARTICLE_PALETTE_CONSTANTS)
