"""Falling glyph markers that deposit characters into the main text."""

import random
from enum import Enum

from ..colors import BLACK, FLASH_GREEN, MATRIX_GREEN, RgbColor
from ..constants import RAIN_Y_STEP
from ..glyphs import garble_text
from .timeline import (
    deposit_frame_for,
    fade_in_steps_for,
    fade_out_steps_for,
    fade_progress,
    has_deposited,
    start_offset_for,
    text_fade_steps_for,
)


class DropPhase(Enum):
    SPAWNED = "spawned"
    DEPOSITING = "depositing"
    SETTLING = "settling"
    REMOVED = "removed"


class RainDrop:
    """One rain drop, bound to a single character of the animated text."""

    def __init__(
        self,
        drop_id: str,
        index: int,
        char_index: int,
        x: float,
        row_y: float,
        rng: random.Random,
    ):
        """
        Initialize a drop above its character.

        Args:
            drop_id: Backend object ID of the drop's text box
            index: Position of the drop among the element's drops
            char_index: Index of the character this drop deposits
            x: Horizontal position of the character in points
            row_y: Vertical position of the text row in points
            rng: Glyph randomness source
        """
        self.drop_id = drop_id
        self.index = index
        self.char_index = char_index
        self.x = x
        self.row_y = row_y
        self.rng = rng

        self.start_offset = start_offset_for(index)
        self.fade_in_steps = fade_in_steps_for(index)
        self.fade_out_steps = fade_out_steps_for(index)
        self.text_fade_steps = text_fade_steps_for(index)
        self.deposit_frame = deposit_frame_for(self.start_offset)

        self.y = row_y - self.start_offset
        self.phase = DropPhase.SPAWNED
        self.color = BLACK
        self.glyph = garble_text("X", rng)

    def has_deposited(self, frame: int) -> bool:
        return has_deposited(self.start_offset, frame)

    def animate(self, frame: int) -> None:
        """Advance the drop to ``frame``: fall one step, recolor and re-roll the glyph."""
        if self.phase is DropPhase.REMOVED:
            return
        self.y = self.row_y - self.start_offset + (frame + 1) * RAIN_Y_STEP
        self.glyph = garble_text("X", self.rng)

        if not self.has_deposited(frame):
            self.phase = DropPhase.SPAWNED
            self.color = FLASH_GREEN.scaled(fade_progress(frame + 1, self.fade_in_steps))
        elif frame == self.deposit_frame:
            self.phase = DropPhase.DEPOSITING
            self.color = FLASH_GREEN
        else:
            self.phase = DropPhase.SETTLING
            since_deposit = frame - self.deposit_frame
            self.color = MATRIX_GREEN.scaled(1 - fade_progress(since_deposit, self.fade_out_steps))

    def remove(self) -> None:
        self.phase = DropPhase.REMOVED

    def text_color(self, frame: int, target: RgbColor = FLASH_GREEN) -> RgbColor:
        """Color of the deposited character on ``frame``, fading in from black."""
        return target.scaled(fade_progress(frame - self.deposit_frame, self.text_fade_steps))
