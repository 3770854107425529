"""Deck generation: turns a DeckConfig into dispatched backend requests."""

import logging
import random
import uuid
from typing import Any, Callable

from . import operations as ops
from .backend import SlidesBackend
from .builder import build_background, build_text_box
from .colors import resolve_color
from .dispatcher import BatchDispatcher
from .errors import ConfigError, SlideRangeError
from .models import DeckConfig, GenerationResult, ReviewData, SlideSpec
from .operations import Operation
from .reveal import RevealAnimator
from .review import REVIEW_LAYOUT, build_review_slides, review_content_operations

logger = logging.getLogger(__name__)


def _default_id_suffix() -> str:
    return uuid.uuid4().hex[:12]


class SlideGenerator:
    """Builds, replaces, appends to, or updates a presentation from a deck config."""

    def __init__(
        self,
        backend: SlidesBackend,
        dispatcher: BatchDispatcher | None = None,
        rng: random.Random | None = None,
        id_suffix_factory: Callable[[], str] = _default_id_suffix,
    ):
        """
        Initialize generator.

        Args:
            backend: Presentation service
            dispatcher: Request dispatcher; one over ``backend`` is created if omitted
            rng: Glyph randomness source handed to every reveal animator
            id_suffix_factory: Produces the unique suffix of generated slide IDs
        """
        self.backend = backend
        self.dispatcher = dispatcher or BatchDispatcher(backend)
        self.rng = rng or random.Random()
        self.id_suffix_factory = id_suffix_factory

    def generate(self, config: DeckConfig) -> GenerationResult:
        """
        Generate slides from a deck config.

        Routes to in-place slide update when the config names both a
        presentation and a target slide. Otherwise the slides are created in
        a new presentation, appended to an existing one, or replace an
        existing one's slides.
        """
        if config.is_update:
            return self.update_slide(config)

        presentation_id, insertion_offset = self._prepare_presentation(config)
        suffix = self.id_suffix_factory()

        requests: list[Operation] = []
        for slide_index, slide in enumerate(config.slides):
            slide_id = f"slide_{slide_index + insertion_offset}_{suffix}"
            requests.append(ops.create_slide(slide_id, slide_index + insertion_offset))
            requests.extend(self._background_requests(slide_id, slide, config))
            for elem_index, elem in enumerate(slide.elements):
                element_id = f"{slide_id}_text_{elem_index}"
                color = resolve_color(elem.color, config.theme)
                requests.extend(build_text_box(slide_id, element_id, elem, color))

        logger.info(
            "Creating %d slide(s) in %s (%d requests)",
            len(config.slides),
            presentation_id,
            len(requests),
        )
        self.dispatcher.dispatch(presentation_id, requests)
        self._insert_speaker_notes(presentation_id, config, insertion_offset)
        return GenerationResult(presentation_id)

    def _prepare_presentation(self, config: DeckConfig) -> tuple[str, int]:
        """Resolve the target presentation and the insertion index of the first new slide."""
        presentation_id = config.presentation_id

        if presentation_id and config.append:
            existing = self._existing_slides(presentation_id)
            logger.info("Appending after %d existing slide(s)", len(existing))
            return presentation_id, len(existing)

        if presentation_id:
            existing = self._existing_slides(presentation_id)
            logger.info("Replacing %d existing slide(s)", len(existing))
            self.dispatcher.dispatch_frame(
                presentation_id, [ops.delete_object(slide["objectId"]) for slide in existing]
            )
            return presentation_id, 0

        created = self.backend.create_document(config.title)
        presentation_id = created["presentationId"]
        logger.info("Created presentation %s", presentation_id)
        default_slides = created.get("slides") or []
        if default_slides and default_slides[0].get("objectId"):
            self.dispatcher.dispatch(
                presentation_id, [ops.delete_object(default_slides[0]["objectId"])]
            )
        return presentation_id, 0

    def _existing_slides(self, presentation_id: str) -> list[dict[str, Any]]:
        return self.backend.fetch_document(presentation_id).get("slides") or []

    def _background_requests(
        self, slide_id: str, slide: SlideSpec, config: DeckConfig
    ) -> list[Operation]:
        if slide.background is None:
            return []
        return [build_background(slide_id, resolve_color(slide.background, config.theme))]

    def _insert_speaker_notes(
        self, presentation_id: str, config: DeckConfig, insertion_offset: int
    ) -> None:
        if not any(slide.notes for slide in config.slides):
            return

        requests: list[Operation] = []
        for i, slide in enumerate(self._existing_slides(presentation_id)):
            config_index = i - insertion_offset
            if config_index < 0 or config_index >= len(config.slides):
                continue
            notes = config.slides[config_index].notes
            notes_id = _speaker_notes_id(slide)
            if notes and notes_id:
                requests.append(ops.insert_text(notes_id, notes, insertion_index=0))

        self.dispatcher.dispatch(presentation_id, requests)

    def update_slide(self, config: DeckConfig) -> GenerationResult:
        """
        Rebuild one existing slide in place from ``config.slides[0]``.

        Every element on the target slide is deleted and recreated. Elements
        marked ``animate="matrix"`` are created blank and then revealed frame
        by frame, so anyone viewing the presentation sees the effect live.

        Raises:
            ConfigError: If the config has no slides
            SlideRangeError: If the deck is empty or the target index is out of range
        """
        if not config.slides:
            raise ConfigError("No slides defined in config for update")
        if config.presentation_id is None or config.update_slide is None:
            raise ConfigError("Updating a slide requires a presentation ID and a target slide")

        presentation_id = config.presentation_id
        slide_def = config.slides[0]
        existing = self._existing_slides(presentation_id)
        if not existing:
            raise SlideRangeError("Presentation has no slides to update")

        target_index = len(existing) - 1 if config.update_slide == "last" else config.update_slide
        if target_index < 0 or target_index >= len(existing):
            raise SlideRangeError(
                f"Slide index {target_index} out of range (0-{len(existing) - 1})"
            )

        target_slide = existing[target_index]
        slide_id = target_slide["objectId"]
        requests = [
            ops.delete_object(element["objectId"])
            for element in target_slide.get("pageElements") or []
            if element.get("objectId")
        ]
        requests.extend(self._background_requests(slide_id, slide_def, config))

        animators: list[RevealAnimator] = []
        for elem_index, elem in enumerate(slide_def.elements):
            element_id = f"{slide_id}_elem_{elem_index}"
            color = resolve_color(elem.color, config.theme)
            if elem.is_animated:
                animator = RevealAnimator(slide_id, element_id, elem, color, rng=self.rng)
                requests.extend(animator.creation_operations())
                animators.append(animator)
            else:
                requests.extend(build_text_box(slide_id, element_id, elem, color))

        logger.info("Updating slide %d (%s) of %s", target_index, slide_id, presentation_id)
        self.dispatcher.dispatch(presentation_id, requests)

        for animator in animators:
            logger.info(
                "Revealing %s over %d frames", animator.element_id, animator.total_frames
            )
            animator.play(self.dispatcher, presentation_id)

        if slide_def.notes:
            self._replace_speaker_notes(presentation_id, target_slide, slide_def.notes)

        return GenerationResult(presentation_id)

    def generate_review(self, review: ReviewData) -> GenerationResult:
        """
        Build a five-slide review deck in a new presentation.

        Slides use the title-and-body layout; their placeholders are looked up
        after creation and filled with the review content.
        """
        created = self.backend.create_document(review.deck_title)
        presentation_id = created["presentationId"]
        logger.info("Created presentation %s for PR #%d", presentation_id, review.pr_number)

        suffix = self.id_suffix_factory()
        review_slides = build_review_slides(review)
        slide_ids = {slide.key: f"{slide.key}_{suffix}" for slide in review_slides}

        requests = [
            ops.delete_object(slide["objectId"])
            for slide in (created.get("slides") or [])[:1]
            if slide.get("objectId")
        ]
        requests.extend(
            ops.create_slide(slide_ids[slide.key], layout=REVIEW_LAYOUT) for slide in review_slides
        )
        self.dispatcher.dispatch(presentation_id, requests)

        created_slides = {
            slide["objectId"]: slide for slide in self._existing_slides(presentation_id)
        }
        content: list[Operation] = []
        for review_slide in review_slides:
            slide = created_slides.get(slide_ids[review_slide.key])
            if slide is None:
                logger.warning("Review slide %s missing after creation", review_slide.key)
                continue
            title_id, body_id = _placeholder_ids(slide)
            content.extend(review_content_operations(review_slide, title_id, body_id))

        self.dispatcher.dispatch(presentation_id, content)
        return GenerationResult(presentation_id)

    def _replace_speaker_notes(
        self, presentation_id: str, slide: dict[str, Any], notes: str
    ) -> None:
        notes_id = _speaker_notes_id(slide)
        if not notes_id:
            return
        requests: list[Operation] = []
        if _has_existing_notes(slide, notes_id):
            requests.append(ops.delete_all_text(notes_id))
        requests.append(ops.insert_text(notes_id, notes, insertion_index=0))
        self.dispatcher.dispatch(presentation_id, requests)


def _speaker_notes_id(slide: dict[str, Any]) -> str | None:
    notes_page = (slide.get("slideProperties") or {}).get("notesPage") or {}
    return (notes_page.get("notesProperties") or {}).get("speakerNotesObjectId")


def _has_existing_notes(slide: dict[str, Any], notes_id: str) -> bool:
    """Whether the speaker notes shape holds non-blank text (deleteText fails on empty shapes)."""
    notes_page = (slide.get("slideProperties") or {}).get("notesPage") or {}
    for element in notes_page.get("pageElements") or []:
        if element.get("objectId") != notes_id:
            continue
        text_elements = ((element.get("shape") or {}).get("text") or {}).get("textElements") or []
        return any(
            (te.get("textRun") or {}).get("content", "").strip() for te in text_elements
        )
    return False


def _placeholder_ids(slide: dict[str, Any]) -> tuple[str | None, str | None]:
    """Object IDs of the slide's TITLE and BODY placeholders."""
    found: dict[str, str] = {}
    for element in slide.get("pageElements") or []:
        placeholder_type = ((element.get("shape") or {}).get("placeholder") or {}).get("type")
        if placeholder_type in ("TITLE", "BODY") and placeholder_type not in found:
            found[placeholder_type] = element.get("objectId")
    return found.get("TITLE"), found.get("BODY")
