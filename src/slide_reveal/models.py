"""Immutable deck description models."""

from dataclasses import dataclass, field
from typing import Literal

from .colors import ColorSpec, RgbColor
from .constants import PRESENTATION_URL_TEMPLATE

AnimationMode = Literal["matrix"]
SlideTarget = int | Literal["last"]


@dataclass(frozen=True, slots=True)
class TextElementSpec:
    """A positioned text box. Coordinates and sizes are in points."""
    text: str
    x: float
    y: float
    w: float
    h: float
    size: float
    color: ColorSpec = "white"
    bold: bool = False
    animate: AnimationMode | None = None

    @property
    def is_animated(self) -> bool:
        return self.animate == "matrix"


@dataclass(frozen=True, slots=True)
class SlideSpec:
    elements: tuple[TextElementSpec, ...] = ()
    background: ColorSpec | None = None
    notes: str | None = None


@dataclass(frozen=True)
class DeckConfig:
    """Everything needed to build or update one presentation."""
    title: str
    slides: tuple[SlideSpec, ...]
    theme: dict[str, RgbColor] = field(default_factory=dict)
    presentation_id: str | None = None
    append: bool = False
    update_slide: SlideTarget | None = None

    @property
    def is_update(self) -> bool:
        return self.presentation_id is not None and self.update_slide is not None


@dataclass(frozen=True, slots=True)
class GenerationResult:
    presentation_id: str

    @property
    def presentation_url(self) -> str:
        return PRESENTATION_URL_TEMPLATE.format(presentation_id=self.presentation_id)

    def to_dict(self) -> dict[str, str]:
        return {
            "presentationId": self.presentation_id,
            "presentationUrl": self.presentation_url,
        }


ReviewStatus = Literal["pass", "warning", "issue"]
RiskLevel = Literal["low", "medium", "high"]
Verdict = Literal["APPROVE", "REQUEST_CHANGES", "COMMENT"]


@dataclass(frozen=True, slots=True)
class QualityCheck:
    status: ReviewStatus
    notes: str = ""


@dataclass(frozen=True)
class ReviewData:
    """A pull request review, rendered as a five-slide deck."""
    pr_number: int
    pr_title: str
    pr_author: str
    pr_date: str
    repository: str
    summary: str
    code_quality: QualityCheck
    tests: QualityCheck
    security: QualityCheck
    performance: QualityCheck
    verdict: Verdict
    verdict_explanation: str
    changes: tuple[str, ...] = ()
    issues_found: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()
    business_impact: str | None = None
    risk_level: RiskLevel | None = None
    risk_factors: tuple[str, ...] = ()
    affected_areas: tuple[str, ...] = ()

    @property
    def deck_title(self) -> str:
        return f"PR Review: {self.pr_title}"

    @property
    def quality_checks(self) -> tuple[tuple[str, QualityCheck], ...]:
        return (
            ("Code Quality", self.code_quality),
            ("Tests", self.tests),
            ("Security", self.security),
            ("Performance", self.performance),
        )
