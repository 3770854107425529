"""Frame-based matrix reveal animation."""

from .animator import RevealAnimator
from .frames import CREATION_FRAME, DropFrameState, RevealFrame
from .rain_drop import DropPhase, RainDrop
from .timeline import deposit_frame_for, last_deposit_frame, total_frames

__all__ = [
    "RevealAnimator",
    "RevealFrame",
    "DropFrameState",
    "CREATION_FRAME",
    "RainDrop",
    "DropPhase",
    "deposit_frame_for",
    "last_deposit_frame",
    "total_frames",
]
