"""Immutable per-frame snapshots of a reveal sequence."""

from dataclasses import dataclass
from typing import Iterable

from ..colors import RgbColor
from .rain_drop import DropPhase, RainDrop

CREATION_FRAME = -1


@dataclass(frozen=True)
class DropFrameState:
    drop_id: str
    char_index: int
    x: float
    y: float
    glyph: str
    color: RgbColor
    phase: DropPhase


@dataclass(frozen=True)
class RevealFrame:
    """The whole animated element (main text plus drops) at one frame."""

    index: int
    is_final: bool
    text: str
    char_colors: tuple[tuple[int, RgbColor], ...]
    drops: tuple[DropFrameState, ...]

    @property
    def is_creation(self) -> bool:
        return self.index == CREATION_FRAME

    @property
    def deposited(self) -> frozenset[int]:
        return frozenset(char_index for char_index, _ in self.char_colors)


def snapshot_drops(drops: Iterable[RainDrop]) -> tuple[DropFrameState, ...]:
    return tuple(
        DropFrameState(
            drop_id=drop.drop_id,
            char_index=drop.char_index,
            x=drop.x,
            y=drop.y,
            glyph=drop.glyph,
            color=drop.color,
            phase=drop.phase,
        )
        for drop in drops
    )
