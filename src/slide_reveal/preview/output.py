"""Animated image encoders for reveal previews."""

from abc import ABC, abstractmethod
from io import BytesIO
from pathlib import Path
from typing import Iterator

from PIL import Image


class PreviewOutputProvider(ABC):
    """Encodes rendered preview frames into one animated image file."""

    def __init__(self, path: str = ""):
        self.path = path

    @property
    @abstractmethod
    def output_format(self) -> str:
        """Pillow format identifier (for example, ``gif`` or ``webp``)."""
        raise NotImplementedError

    @property
    def save_options(self) -> dict[str, object]:
        """Additional Pillow ``save`` kwargs for this format."""
        return {}

    def encode(self, frames: Iterator[Image.Image], frame_duration: int) -> bytes:
        """
        Encode frames as a looping animation.

        Args:
            frames: Rendered frames in display order
            frame_duration: Display time of each frame in milliseconds

        Returns:
            Encoded file content, or ``b""`` when there are no frames
        """
        frame_list = list(frames)
        if not frame_list:
            return b""

        buffer = BytesIO()
        frame_list[0].save(
            buffer,
            format=self.output_format,
            save_all=True,
            append_images=frame_list[1:],
            duration=max(frame_duration, 1),
            loop=0,
            **self.save_options,
        )
        return buffer.getvalue()

    def write(self, data: bytes) -> None:
        if not self.path:
            raise ValueError("Output path not set")
        with open(self.path, "wb") as f:
            f.write(data)


class GifOutputProvider(PreviewOutputProvider):
    @property
    def output_format(self) -> str:
        return "gif"

    @property
    def save_options(self) -> dict[str, object]:
        return {"optimize": False}


class WebPOutputProvider(PreviewOutputProvider):
    @property
    def output_format(self) -> str:
        return "webp"

    @property
    def save_options(self) -> dict[str, object]:
        return {"lossless": True, "quality": 100, "method": 4}


_PROVIDERS: dict[str, type[PreviewOutputProvider]] = {
    ".gif": GifOutputProvider,
    ".webp": WebPOutputProvider,
}


def supported_preview_extensions() -> tuple[str, ...]:
    return tuple(_PROVIDERS.keys())


def resolve_output_provider(file_path: str) -> PreviewOutputProvider:
    """
    Pick the encoder matching the output file extension.

    Raises:
        ValueError: If the extension is not supported
    """
    ext = Path(file_path).suffix.lower()
    provider_class = _PROVIDERS.get(ext)
    if provider_class is None:
        supported = ", ".join(supported_preview_extensions())
        raise ValueError(f"Unsupported output format: {ext}. Supported formats: {supported}")
    return provider_class(file_path)
