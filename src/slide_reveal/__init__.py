"""Declarative Google Slides generation with a frame-based matrix reveal."""

from .colors import RgbColor, resolve_color, to_backend_units
from .errors import BackendError, ConfigError, SlideRangeError, SlideRevealError
from .generator import SlideGenerator
from .models import (
    DeckConfig,
    GenerationResult,
    QualityCheck,
    ReviewData,
    SlideSpec,
    TextElementSpec,
)

__all__ = [
    "BackendError",
    "ConfigError",
    "DeckConfig",
    "GenerationResult",
    "QualityCheck",
    "ReviewData",
    "RgbColor",
    "SlideGenerator",
    "SlideRangeError",
    "SlideRevealError",
    "SlideSpec",
    "TextElementSpec",
    "resolve_color",
    "to_backend_units",
]
