"""Sequential, size-bounded request dispatch."""

import logging
from typing import Iterator, Sequence

from .backend import SlidesBackend
from .constants import MAX_BATCH_SIZE
from .operations import Operation

logger = logging.getLogger(__name__)


def chunk_operations(
    operations: Sequence[Operation], max_batch_size: int = MAX_BATCH_SIZE
) -> Iterator[list[Operation]]:
    """Split ``operations`` into consecutive chunks of at most ``max_batch_size``."""
    if max_batch_size <= 0:
        raise ValueError(f"max_batch_size must be positive, got {max_batch_size}")
    for start in range(0, len(operations), max_batch_size):
        yield list(operations[start : start + max_batch_size])


class BatchDispatcher:
    """
    Sends request lists to the backend strictly in order.

    Every chunk is acknowledged before the next one is sent; round-trip
    latency is the only pacing the reveal animation gets.
    """

    def __init__(self, backend: SlidesBackend, max_batch_size: int = MAX_BATCH_SIZE):
        self.backend = backend
        self.max_batch_size = max_batch_size
        self.calls = 0

    def dispatch(self, presentation_id: str, operations: Sequence[Operation]) -> None:
        """Send ``operations`` in sequential chunks. An empty list sends nothing."""
        for chunk in chunk_operations(operations, self.max_batch_size):
            self._send(presentation_id, chunk)

    def dispatch_frame(self, presentation_id: str, operations: Sequence[Operation]) -> None:
        """
        Send ``operations`` as a single batch, never split.

        Used for animation frames and slide wipes, which must apply all at once.
        """
        if operations:
            self._send(presentation_id, list(operations))

    def _send(self, presentation_id: str, batch: list[Operation]) -> None:
        logger.debug("batchUpdate #%d: %d requests", self.calls + 1, len(batch))
        self.backend.apply_batch(presentation_id, batch)
        self.calls += 1
