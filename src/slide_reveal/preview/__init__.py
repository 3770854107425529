"""Local raster previews of the matrix reveal."""

from .output import (
    GifOutputProvider,
    PreviewOutputProvider,
    WebPOutputProvider,
    resolve_output_provider,
    supported_preview_extensions,
)
from .renderer import RevealRenderer, generate_preview_frames

__all__ = [
    "RevealRenderer",
    "generate_preview_frames",
    "PreviewOutputProvider",
    "GifOutputProvider",
    "WebPOutputProvider",
    "resolve_output_provider",
    "supported_preview_extensions",
]
