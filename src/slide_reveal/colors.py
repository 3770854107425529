"""Unit conversion and color resolution for backend requests."""

from dataclasses import dataclass
from typing import Mapping, Union

from .constants import PT_TO_EMU
from .errors import ConfigError


@dataclass(frozen=True, slots=True)
class RgbColor:
    """An opaque color with components in [0, 1]."""
    red: float
    green: float
    blue: float

    def scaled(self, factor: float) -> "RgbColor":
        """Return this color multiplied by ``factor`` (clamped to [0, 1])."""
        factor = min(max(factor, 0.0), 1.0)
        return RgbColor(self.red * factor, self.green * factor, self.blue * factor)

    def to_api(self) -> dict[str, float]:
        return {"red": self.red, "green": self.green, "blue": self.blue}

    def to_rgb255(self) -> tuple[int, int, int]:
        return (
            round(self.red * 255),
            round(self.green * 255),
            round(self.blue * 255),
        )


ColorSpec = Union[RgbColor, str]
Theme = Mapping[str, RgbColor]

BLACK = RgbColor(0.0, 0.0, 0.0)
MATRIX_GREEN = RgbColor(0.0, 0.8, 0.2)
FLASH_GREEN = RgbColor(0.3, 1.0, 0.3)

BUILTIN_PALETTE: dict[str, RgbColor] = {
    "primary": RgbColor(0.2, 0.4, 0.8),
    "success": RgbColor(0.2, 0.7, 0.3),
    "warning": RgbColor(0.9, 0.6, 0.1),
    "danger": RgbColor(0.8, 0.2, 0.2),
    "dark": RgbColor(0.2, 0.2, 0.2),
    "light": RgbColor(0.95, 0.95, 0.95),
    "white": RgbColor(1.0, 1.0, 1.0),
    "black": BLACK,
}


def to_backend_units(points: float) -> float:
    """Convert points to EMU, the only spatial unit the backend accepts."""
    return points * PT_TO_EMU


def resolve_color(spec: ColorSpec, theme: Theme | None = None) -> RgbColor:
    """
    Resolve a color spec to a concrete RGB color.

    Symbolic names are looked up in the supplied theme first, then in the
    built-in palette.

    Args:
        spec: An RgbColor (returned unchanged) or a color name
        theme: Optional caller-supplied name -> color table

    Returns:
        The resolved RgbColor

    Raises:
        ConfigError: If the name is in neither the theme nor the palette
    """
    if isinstance(spec, RgbColor):
        return spec
    if theme and spec in theme:
        return theme[spec]
    if spec in BUILTIN_PALETTE:
        return BUILTIN_PALETTE[spec]
    raise ConfigError(f"Unknown color '{spec}': not defined in theme or built-in palette")
