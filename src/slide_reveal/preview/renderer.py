"""Renders reveal frames as PIL images for local preview."""

from typing import Iterator

from PIL import Image, ImageDraw, ImageFont

from ..constants import RAIN_DROP_SIZE, RAIN_START_OFFSETS, RAIN_Y_STEP
from ..reveal import DropPhase, RevealAnimator, RevealFrame

BACKGROUND_COLOR = (0, 0, 0)
DROP_TRAIL_LENGTH = 3


class RevealRenderer:
    """Draws the main text and rain drops of one animated element."""

    def __init__(self, animator: RevealAnimator, scale: float = 2.0, padding: float = 10.0):
        """
        Initialize renderer.

        Args:
            animator: Animator whose element is being previewed
            scale: Pixels per point
            padding: Margin around the element in points
        """
        self.animator = animator
        self.spec = animator.spec
        self.scale = scale

        self.origin_x = self.spec.x - padding
        self.origin_y = self.spec.y - max(RAIN_START_OFFSETS) - padding
        self.width = max(1, round((self.spec.w + 2 * padding) * scale))
        self.height = max(1, round((self.spec.y + self.spec.h + padding - self.origin_y) * scale))
        self.font = ImageFont.load_default(size=max(1, round(self.spec.size * scale)))

    def _to_pixels(self, x: float, y: float) -> tuple[float, float]:
        return (x - self.origin_x) * self.scale, (y - self.origin_y) * self.scale

    def render_frame(self, frame: RevealFrame) -> Image.Image:
        """
        Render one frame snapshot.

        Returns:
            RGB image of the element at that frame
        """
        img = Image.new("RGB", (self.width, self.height), BACKGROUND_COLOR)
        draw = ImageDraw.Draw(img, "RGBA")
        self._draw_text(draw, frame)
        for drop in frame.drops:
            if drop.phase is not DropPhase.REMOVED:
                self._draw_drop(draw, drop.x, drop.y, drop.color.to_rgb255())
        return img

    def _draw_text(self, draw: ImageDraw.ImageDraw, frame: RevealFrame) -> None:
        colors = dict(frame.char_colors)
        for char_index, ch in enumerate(frame.text):
            color = colors.get(char_index)
            if ch == " " or color is None:
                continue
            position = self._to_pixels(self.animator.char_x(char_index), self.spec.y)
            draw.text(position, ch, font=self.font, fill=color.to_rgb255())

    def _draw_drop(
        self, draw: ImageDraw.ImageDraw, x: float, y: float, color: tuple[int, int, int]
    ) -> None:
        """Draw the drop as a glyph-sized block with a fading trail above it."""
        block = RAIN_DROP_SIZE * 0.5
        for i in range(DROP_TRAIL_LENGTH, 0, -1):
            trail_y = y - i * RAIN_Y_STEP / DROP_TRAIL_LENGTH
            alpha = int(255 * (1 - i / (DROP_TRAIL_LENGTH + 1)) / 2)
            self._fill_block(draw, x, trail_y, block, (*color, alpha))
        self._fill_block(draw, x, y, block, (*color, 255))

    def _fill_block(
        self,
        draw: ImageDraw.ImageDraw,
        x: float,
        y: float,
        size: float,
        fill: tuple[int, int, int, int],
    ) -> None:
        left, top = self._to_pixels(x, y)
        draw.rectangle([left, top, left + size * self.scale, top + size * self.scale], fill=fill)


def generate_preview_frames(animator: RevealAnimator, scale: float = 2.0) -> Iterator[Image.Image]:
    """Render the creation snapshot and every frame of the animator's timeline."""
    renderer = RevealRenderer(animator, scale=scale)
    for frame in animator.iter_state_timeline():
        yield renderer.render_frame(frame)
