"""
Background theme - the gallery backdrop preference.

A background is either a flat color ("#0f172a") or a CSS radial gradient
expression. It is stored as that raw string; everything else (is it a
gradient, is it dark, what the color picker should show) is derived from it.
"""

import re
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BackgroundPreset:
    """A curated backdrop. `color` is what the picker shows for it."""

    name: str
    value: str
    color: str


BG_PRESETS = (
    BackgroundPreset(
        "Platinum (Default)",
        "radial-gradient(circle at 50% 0%, #ffffff 0%, #e2e8f0 50%, #cbd5e1 100%)",
        "#e2e8f0",
    ),
    BackgroundPreset("Dark Slate", "#0f172a", "#0f172a"),
    BackgroundPreset(
        "Midnight Void",
        "radial-gradient(circle at 50% 0%, #1e1b4b 0%, #020617 100%)",
        "#1e1b4b",
    ),
    BackgroundPreset("Warm Paper", "#fdfbf7", "#fdfbf7"),
    BackgroundPreset("Soft Gray", "#f3f4f6", "#f3f4f6"),
)
DEFAULT_PRESET = BG_PRESETS[0]

DARK_COLORS = frozenset({"#0f172a", "#1e1b4b", "#020617"})

_HEX_COLOR = re.compile(r"^#[0-9a-f]{6}$", re.IGNORECASE)
_COLOR_TOKEN = re.compile(r"#[0-9a-f]{3,8}\b", re.IGNORECASE)

# Share of white mixed into the spotlight highlight
HIGHLIGHT_FACTOR = 0.6


def is_gradient(background: str) -> bool:
    return "gradient" in background


def is_dark(background: str) -> bool:
    """True when any color in the background is one of the known dark ones."""
    return any(token.lower() in DARK_COLORS for token in _COLOR_TOKEN.findall(background))


def find_preset(value: str) -> Optional[BackgroundPreset]:
    for preset in BG_PRESETS:
        if preset.value == value:
            return preset
    return None


def find_preset_by_name(name: str) -> Optional[BackgroundPreset]:
    for preset in BG_PRESETS:
        if preset.name.lower() == name.lower():
            return preset
    return None


def highlight_color(hex_color: str) -> str:
    """Tint a #rrggbb color toward white. Anything else gives white."""
    if not _HEX_COLOR.match(hex_color):
        return "#ffffff"
    channels = [int(hex_color[i:i + 2], 16) for i in (1, 3, 5)]
    lifted = [round(c + (255 - c) * HIGHLIGHT_FACTOR) for c in channels]
    return "#" + "".join(f"{c:02x}" for c in lifted)


def build_background(color: str, gradient: bool) -> str:
    """Flat color, or a spotlight gradient from a lighter tint into `color`."""
    if not gradient:
        return color
    return f"radial-gradient(circle at 50% 0%, {highlight_color(color)} 0%, {color} 100%)"


@dataclass
class ThemeState:
    """The saved background plus the picker controls synced to it."""

    background: str = DEFAULT_PRESET.value
    picker_color: str = DEFAULT_PRESET.color
    gradient: bool = True

    @property
    def dark(self) -> bool:
        return is_dark(self.background)

    @classmethod
    def from_saved(cls, saved: Optional[str]) -> "ThemeState":
        """
        Rebuild picker state from a stored background.

        Presets restore their own picker color and flat colors are used
        directly. A custom gradient keeps the default picker color since the
        base color cannot be recovered reliably.
        """
        state = cls()
        if not saved:
            return state
        state.background = saved
        state.gradient = is_gradient(saved)
        preset = find_preset(saved)
        if preset:
            state.picker_color = preset.color
        elif not state.gradient:
            state.picker_color = saved
        return state

    def select_preset(self, preset: BackgroundPreset) -> None:
        self.background = preset.value
        self.picker_color = preset.color
        self.gradient = is_gradient(preset.value)

    def pick_color(self, color: str) -> None:
        self.picker_color = color
        self.background = build_background(color, self.gradient)

    def set_gradient(self, gradient: bool) -> None:
        self.gradient = gradient
        self.background = build_background(self.picker_color, gradient)

    def reset(self) -> None:
        self.select_preset(DEFAULT_PRESET)
