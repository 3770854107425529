"""Exception hierarchy shared by the generator, animator and backend."""


class SlideRevealError(Exception):
    """Base exception for all slide-reveal failures."""


class ConfigError(SlideRevealError):
    """Raised when a deck config or color reference cannot be resolved."""


class SlideRangeError(SlideRevealError, IndexError):
    """Raised when a target slide index falls outside the deck."""


class BackendError(SlideRevealError):
    """Raised when a call to the presentation backend fails."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status
