"""Frame arithmetic for the matrix reveal.

Everything here is a pure function of the rotating constant tables, so frame
counts can be computed (and tested) without building any requests.
"""

import math
from typing import Iterable, Sequence

from ..constants import (
    RAIN_FADE_IN_STEPS,
    RAIN_FADE_STEPS,
    RAIN_START_OFFSETS,
    RAIN_TAIL_FRAMES,
    RAIN_Y_STEP,
    TEXT_FADE_STEPS,
)


def _rotate(table: Sequence[int], index: int) -> int:
    return table[index % len(table)]


def start_offset_for(drop_index: int) -> int:
    return _rotate(RAIN_START_OFFSETS, drop_index)


def fade_in_steps_for(drop_index: int) -> int:
    return _rotate(RAIN_FADE_IN_STEPS, drop_index)


def fade_out_steps_for(drop_index: int) -> int:
    return _rotate(RAIN_FADE_STEPS, drop_index)


def text_fade_steps_for(drop_index: int) -> int:
    return _rotate(TEXT_FADE_STEPS, drop_index)


def deposit_frame_for(start_offset: float) -> int:
    """First frame on which a drop starting ``start_offset`` points up reaches its row."""
    return math.ceil(start_offset / RAIN_Y_STEP) - 1


def has_deposited(start_offset: float, frame: int) -> bool:
    return (frame + 1) * RAIN_Y_STEP >= start_offset


def last_deposit_frame(start_offsets: Iterable[float]) -> int:
    """Deposit frame of the highest drop; defined for an empty drop set too."""
    return deposit_frame_for(max(start_offsets, default=RAIN_START_OFFSETS[0]))


def total_frames(start_offsets: Iterable[float]) -> int:
    """Deposit frames, then the settle tail, then one cleanup frame."""
    return last_deposit_frame(start_offsets) + 1 + RAIN_TAIL_FRAMES + 1


def fade_progress(elapsed_frames: float, steps: int) -> float:
    """Linear progress over ``steps`` frames, clamped to [0, 1]."""
    return min(max(elapsed_frames / steps, 0.0), 1.0)


def rain_char_indices(text: str) -> list[int]:
    """Indices of the characters that get a rain drop (every non-space)."""
    return [i for i, ch in enumerate(text) if ch != " "]


def masked_text(text: str, visible: Iterable[int] = ()) -> str:
    """Replace every character whose index is not in ``visible`` with a space."""
    shown = set(visible)
    return "".join(ch if i in shown else " " for i, ch in enumerate(text))
