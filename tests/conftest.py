"""Shared fixtures: an in-memory Slides backend that records every batch."""

from typing import Any, Sequence

import pytest

from slide_reveal.backend import SlidesBackend
from slide_reveal.errors import BackendError
from slide_reveal.models import TextElementSpec


def make_slide(
    object_id: str,
    page_elements: Sequence[str] = (),
    notes_text: str | None = None,
    placeholders: Sequence[str] = (),
) -> dict[str, Any]:
    """Build a presentation slide resource the way the Slides API returns it."""
    notes_id = f"{object_id}_notes"
    notes_elements: list[dict[str, Any]] = [{"objectId": notes_id, "shape": {}}]
    if notes_text is not None:
        notes_elements[0]["shape"] = {
            "text": {"textElements": [{"textRun": {"content": notes_text}}]}
        }
    return {
        "objectId": object_id,
        "pageElements": [{"objectId": element_id} for element_id in page_elements]
        + [
            {
                "objectId": f"{object_id}_{kind.lower()}",
                "shape": {"shapeType": "TEXT_BOX", "placeholder": {"type": kind}},
            }
            for kind in placeholders
        ],
        "slideProperties": {
            "notesPage": {
                "notesProperties": {"speakerNotesObjectId": notes_id},
                "pageElements": notes_elements,
            }
        },
    }


class FakeBackend(SlidesBackend):
    """Records batches and keeps the slide list in sync with createSlide/deleteObject."""

    def __init__(
        self,
        slides: list[dict[str, Any]] | None = None,
        fail_on_call: int | None = None,
    ):
        self.slides = list(slides or [])
        self.fail_on_call = fail_on_call
        self.batches: list[tuple[str, list[dict[str, Any]]]] = []
        self.created_titles: list[str] = []
        self.fetch_count = 0

    def fetch_document(self, presentation_id: str) -> dict[str, Any]:
        self.fetch_count += 1
        return {"presentationId": presentation_id, "slides": list(self.slides)}

    def create_document(self, title: str) -> dict[str, Any]:
        self.created_titles.append(title)
        self.slides = [make_slide("default_slide")]
        return {"presentationId": "new_pres", "slides": list(self.slides)}

    def apply_batch(self, presentation_id: str, operations: Sequence[dict[str, Any]]) -> dict[str, Any]:
        if self.fail_on_call is not None and len(self.batches) == self.fail_on_call:
            raise BackendError("Failed to batch update: object not found", status=400)
        batch = list(operations)
        self.batches.append((presentation_id, batch))
        for operation in batch:
            if "createSlide" in operation:
                request = operation["createSlide"]
                layout = request["slideLayoutReference"]["predefinedLayout"]
                placeholders = ("TITLE", "BODY") if layout == "TITLE_AND_BODY" else ()
                slide = make_slide(request["objectId"], placeholders=placeholders)
                self.slides.insert(request.get("insertionIndex", len(self.slides)), slide)
            elif "deleteObject" in operation:
                object_id = operation["deleteObject"]["objectId"]
                self.slides = [slide for slide in self.slides if slide["objectId"] != object_id]
        return {"presentationId": presentation_id, "replies": [{} for _ in batch]}

    @property
    def requests(self) -> list[dict[str, Any]]:
        return [operation for _, batch in self.batches for operation in batch]

    def requests_of(self, kind: str) -> list[dict[str, Any]]:
        return [operation[kind] for operation in self.requests if kind in operation]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def slide_factory():
    return make_slide


@pytest.fixture
def backend_factory():
    return FakeBackend


@pytest.fixture
def hello_spec() -> TextElementSpec:
    return TextElementSpec(
        text="Hello", x=50, y=100, w=600, h=60, size=28, color="white", bold=True, animate="matrix"
    )


@pytest.fixture
def review_json() -> dict[str, Any]:
    return {
        "prNumber": 42,
        "prTitle": "Add matrix reveal",
        "prAuthor": "octocat",
        "prDate": "2024-01-05T10:00:00Z",
        "repository": "acme/slides",
        "summary": "Adds a frame-based reveal animation.",
        "changes": ["New animator", "CLI preview command"],
        "qualityAssessment": {
            "codeQuality": {"status": "pass", "notes": "Clean"},
            "tests": {"status": "warning", "notes": "Thin CLI coverage"},
            "security": {"status": "pass", "notes": ""},
            "performance": {"status": "issue", "notes": "One call per frame"},
        },
        "issuesFound": ["Frames can exceed 50 requests"],
        "suggestions": ["Add a seed option"],
        "verdict": "REQUEST_CHANGES",
        "verdictExplanation": "Close, but needs another pass.",
        "riskLevel": "medium",
        "riskFactors": ["Live presentations"],
    }
