"""Presentation backend interface and the Google Slides implementation."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Sequence

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .errors import BackendError, ConfigError
from .operations import Operation

SCOPES = ["https://www.googleapis.com/auth/presentations"]


class SlidesBackend(ABC):
    """The three calls the generator and animator need from a presentation service."""

    @abstractmethod
    def fetch_document(self, presentation_id: str) -> dict[str, Any]:
        """Return the presentation resource (``slides`` with their page elements)."""
        raise NotImplementedError

    @abstractmethod
    def create_document(self, title: str) -> dict[str, Any]:
        """Create an empty presentation; the result carries its ID and default slide."""
        raise NotImplementedError

    @abstractmethod
    def apply_batch(self, presentation_id: str, operations: Sequence[Operation]) -> dict[str, Any]:
        """Apply requests atomically, in order, and return the backend acknowledgment."""
        raise NotImplementedError


class GoogleSlidesBackend(SlidesBackend):
    """SlidesBackend over the Slides v1 REST API."""

    def __init__(self, credentials: Any = None, service: Any = None):
        """
        Initialize the backend.

        Args:
            credentials: google-auth credentials used to build the service
            service: Prebuilt ``slides`` v1 service resource (overrides credentials)
        """
        self.service = service or build(
            "slides", "v1", credentials=credentials, cache_discovery=False
        )

    def fetch_document(self, presentation_id: str) -> dict[str, Any]:
        return self._execute(
            self.service.presentations().get(presentationId=presentation_id),
            f"fetch presentation {presentation_id}",
        )

    def create_document(self, title: str) -> dict[str, Any]:
        return self._execute(
            self.service.presentations().create(body={"title": title}),
            f"create presentation '{title}'",
        )

    def apply_batch(self, presentation_id: str, operations: Sequence[Operation]) -> dict[str, Any]:
        return self._execute(
            self.service.presentations().batchUpdate(
                presentationId=presentation_id,
                body={"requests": list(operations)},
            ),
            f"batch update presentation {presentation_id}",
        )

    @staticmethod
    def _execute(request: Any, action: str) -> dict[str, Any]:
        try:
            return request.execute()
        except HttpError as e:
            raise BackendError(f"Failed to {action}: {e}", status=e.resp.status) from e
        except OSError as e:
            raise BackendError(f"Failed to {action}: {e}") from e


def load_credentials(token_file: str | Path) -> Credentials:
    """Load previously authorized user credentials from a token JSON file."""
    path = Path(token_file).expanduser()
    if not path.exists():
        raise ConfigError(
            f"Token file '{path}' not found. "
            "Authorize once and point SLIDE_REVEAL_TOKEN_FILE at the saved token."
        )
    try:
        return Credentials.from_authorized_user_file(str(path), SCOPES)
    except ValueError as e:
        raise ConfigError(f"Invalid token file '{path}': {e}") from e
