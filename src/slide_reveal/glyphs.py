"""Random matrix glyph substitution."""

import random

from .constants import MATRIX_CHARS, PRESERVE_CHARS


def random_glyph(rng: random.Random) -> str:
    """Pick one glyph from the matrix alphabet."""
    return rng.choice(MATRIX_CHARS)


def garble_text(text: str, rng: random.Random | None = None) -> str:
    """
    Replace every character except spaces and punctuation with a matrix glyph.

    The result always has the same length as ``text``; preserved characters
    keep their positions.

    Args:
        text: Source text
        rng: Randomness source; a fresh unseeded one is used when omitted
    """
    rng = rng or random.Random()
    return "".join(
        ch if ch == " " or ch in PRESERVE_CHARS else random_glyph(rng)
        for ch in text
    )
