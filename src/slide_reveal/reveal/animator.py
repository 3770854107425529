"""Matrix reveal animator: turns one text element into per-frame request batches."""

import logging
import random
from typing import TYPE_CHECKING, Iterator

from .. import operations as ops
from ..builder import build_text_box
from ..colors import BLACK, FLASH_GREEN, RgbColor
from ..constants import CHAR_WIDTH_RATIO, RAIN_DROP_SIZE, TEXT_BOX_PADDING_X
from ..models import TextElementSpec
from ..operations import Operation
from .frames import CREATION_FRAME, RevealFrame, snapshot_drops
from .rain_drop import RainDrop
from .timeline import masked_text, rain_char_indices, start_offset_for, total_frames

if TYPE_CHECKING:
    from ..dispatcher import BatchDispatcher

logger = logging.getLogger(__name__)


class RevealAnimator:
    """Generates the creation batch and frame batches for one animated element."""

    def __init__(
        self,
        page_id: str,
        element_id: str,
        spec: TextElementSpec,
        final_color: RgbColor,
        rng: random.Random | None = None,
    ):
        """
        Initialize animator.

        Args:
            page_id: Slide the element lives on
            element_id: Object ID of the main text box
            spec: The element being revealed
            final_color: Resolved steady-state color of the text
            rng: Glyph randomness source; inject a seeded one for reproducible output
        """
        self.page_id = page_id
        self.element_id = element_id
        self.spec = spec
        self.final_color = final_color
        self.rng = rng or random.Random()

        self.char_indices = rain_char_indices(spec.text)
        self.drop_ids = [f"{element_id}_rain_{i}" for i in range(len(self.char_indices))]
        self.drops: list[RainDrop] = []
        # All-space text has nothing to reveal: creation batch only
        if self.char_indices:
            self.total_frames = total_frames(
                start_offset_for(i) for i in range(len(self.char_indices))
            )
        else:
            self.total_frames = 0

    def char_x(self, char_index: int) -> float:
        """Approximate left edge of a character in points."""
        return self.spec.x + TEXT_BOX_PADDING_X + char_index * self.spec.size * CHAR_WIDTH_RATIO

    def _spawn_drops(self) -> list[RainDrop]:
        return [
            RainDrop(drop_id, i, char_index, self.char_x(char_index), self.spec.y, self.rng)
            for i, (drop_id, char_index) in enumerate(zip(self.drop_ids, self.char_indices))
        ]

    def reset(self) -> RevealFrame:
        """Spawn fresh drops and return the creation snapshot."""
        self.drops = self._spawn_drops()
        return RevealFrame(
            index=CREATION_FRAME,
            is_final=False,
            text=masked_text(self.spec.text),
            char_colors=(),
            drops=snapshot_drops(self.drops),
        )

    def advance(self, frame: int) -> RevealFrame:
        """Move every drop to ``frame`` and snapshot the element."""
        is_final = frame == self.total_frames - 1
        deposited = [drop for drop in self.drops if drop.has_deposited(frame)]

        if is_final:
            for drop in self.drops:
                drop.remove()
            text = self.spec.text
            char_colors = tuple(
                (drop.char_index, drop.text_color(frame, self.final_color)) for drop in deposited
            )
        else:
            for drop in self.drops:
                drop.animate(frame)
            text = masked_text(self.spec.text, (drop.char_index for drop in deposited))
            char_colors = tuple(
                (drop.char_index, drop.text_color(frame, FLASH_GREEN)) for drop in deposited
            )

        return RevealFrame(
            index=frame,
            is_final=is_final,
            text=text,
            char_colors=char_colors,
            drops=snapshot_drops(self.drops),
        )

    def iter_state_timeline(self) -> Iterator[RevealFrame]:
        """Yield the creation snapshot followed by every frame, in order."""
        yield self.reset()
        for frame in range(self.total_frames):
            yield self.advance(frame)

    def operations_for(self, frame: RevealFrame) -> list[Operation]:
        """Build the requests that put the backend into ``frame``'s state."""
        if frame.is_creation:
            return self._creation_operations(frame)
        return self._main_text_operations(frame) + self._drop_operations(frame)

    def _creation_operations(self, frame: RevealFrame) -> list[Operation]:
        requests = build_text_box(
            self.page_id, self.element_id, self.spec, BLACK, text_override=frame.text
        )
        for drop in frame.drops:
            requests.extend(
                [
                    ops.create_text_box(
                        self.page_id, drop.drop_id, drop.x, drop.y, RAIN_DROP_SIZE, RAIN_DROP_SIZE
                    ),
                    ops.insert_text(drop.drop_id, drop.glyph),
                    ops.update_text_style(
                        drop.drop_id, font_size=self.spec.size, bold=True, color=drop.color
                    ),
                ]
            )
        return requests

    def _main_text_operations(self, frame: RevealFrame) -> list[Operation]:
        size, bold = self.spec.size, self.spec.bold
        requests = [
            ops.delete_all_text(self.element_id),
            ops.insert_text(self.element_id, frame.text),
            ops.update_text_style(
                self.element_id,
                font_size=size,
                bold=bold,
                color=BLACK,
                start=0,
                end=len(frame.text),
            ),
        ]
        for char_index, color in frame.char_colors:
            requests.append(
                ops.update_text_style(
                    self.element_id,
                    font_size=size,
                    bold=bold,
                    color=color,
                    start=char_index,
                    end=char_index + 1,
                )
            )
        return requests

    def _drop_operations(self, frame: RevealFrame) -> list[Operation]:
        if frame.is_final:
            return [ops.delete_object(drop.drop_id) for drop in frame.drops]
        requests: list[Operation] = []
        for drop in frame.drops:
            requests.extend(
                [
                    ops.delete_all_text(drop.drop_id),
                    ops.insert_text(drop.drop_id, drop.glyph),
                    ops.update_text_style(
                        drop.drop_id, font_size=self.spec.size, bold=True, color=drop.color
                    ),
                    ops.move_element(drop.drop_id, drop.x, drop.y),
                ]
            )
        return requests

    def creation_operations(self) -> list[Operation]:
        """Reset the drops and return the blank-text and drop creation requests."""
        return self.operations_for(self.reset())

    def iter_frame_batches(self) -> Iterator[list[Operation]]:
        """
        Yield one request batch per frame; each is computed only when requested.

        Drops are respawned first, so the sequence can be replayed.
        """
        self.reset()
        for frame in range(self.total_frames):
            yield self.operations_for(self.advance(frame))

    def play(self, dispatcher: "BatchDispatcher", presentation_id: str) -> int:
        """
        Send every frame batch in order, one round trip per frame.

        ``creation_operations`` must have been applied first. Any dispatch
        failure aborts the remaining frames and propagates.

        Returns:
            Number of frames sent
        """
        sent = 0
        for batch in self.iter_frame_batches():
            try:
                dispatcher.dispatch_frame(presentation_id, batch)
            except Exception:
                logger.warning(
                    "Reveal of %s aborted at frame %d/%d",
                    self.element_id,
                    sent,
                    self.total_frames,
                )
                raise
            sent += 1
        logger.debug("Reveal of %s finished after %d frames", self.element_id, sent)
        return sent

    def run(self, dispatcher: "BatchDispatcher", presentation_id: str) -> int:
        """Create the blank element and its drops, then play every frame."""
        dispatcher.dispatch(presentation_id, self.creation_operations())
        return self.play(dispatcher, presentation_id)
