"""Pull request review deck: slide content and status colors."""

from dataclasses import dataclass
from datetime import datetime

from . import operations as ops
from .colors import BUILTIN_PALETTE, RgbColor
from .models import ReviewData, ReviewStatus, RiskLevel, Verdict
from .operations import Operation

REVIEW_LAYOUT = "TITLE_AND_BODY"
REVIEW_SLIDE_KEYS = ("title", "summary", "impact", "risks", "verdict")

STATUS_LABELS: dict[ReviewStatus, str] = {
    "pass": "OK",
    "warning": "WARN",
    "issue": "ISSUE",
}

STATUS_COLORS: dict[ReviewStatus, RgbColor] = {
    "pass": BUILTIN_PALETTE["success"],
    "warning": BUILTIN_PALETTE["warning"],
    "issue": BUILTIN_PALETTE["danger"],
}

RISK_COLORS: dict[RiskLevel, RgbColor] = {
    "low": BUILTIN_PALETTE["success"],
    "medium": BUILTIN_PALETTE["warning"],
    "high": BUILTIN_PALETTE["danger"],
}

VERDICT_COLORS: dict[Verdict, RgbColor] = {
    "APPROVE": BUILTIN_PALETTE["success"],
    "REQUEST_CHANGES": BUILTIN_PALETTE["danger"],
    "COMMENT": BUILTIN_PALETTE["warning"],
}


@dataclass(frozen=True, slots=True)
class Highlight:
    """A colored span of a slide body, in UTF-16 code units as the backend counts them."""
    start: int
    end: int
    color: RgbColor


@dataclass(frozen=True, slots=True)
class ReviewSlide:
    key: str
    title: str
    body: str
    title_color: RgbColor | None = None
    highlights: tuple[Highlight, ...] = ()


class _BodyWriter:
    """Joins body lines with newlines while recording highlighted spans."""

    def __init__(self):
        self.lines: list[str] = []
        self.highlights: list[Highlight] = []
        self._offset = 0

    def add(self, *lines: str) -> None:
        for line in lines:
            if self.lines:
                self._offset += 1
            self.lines.append(line)
            self._offset += _utf16_len(line)

    def add_highlighted(self, prefix: str, highlighted: str, color: RgbColor) -> None:
        self.add(prefix + highlighted)
        end = self._offset
        self.highlights.append(Highlight(end - _utf16_len(highlighted), end, color))

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def _utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def _bullets(items: tuple[str, ...]) -> list[str]:
    return [f"- {item}" for item in items]


def format_review_date(value: str) -> str:
    """Format an ISO date as ``January 5, 2024``; unparseable values are returned as is."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def _title_slide(data: ReviewData) -> ReviewSlide:
    subtitle = (
        f"PR #{data.pr_number} | {data.repository}\n"
        f"{data.pr_author} | {format_review_date(data.pr_date)}"
    )
    return ReviewSlide("title", data.pr_title, subtitle)


def _summary_slide(data: ReviewData) -> ReviewSlide:
    body = "\n".join([data.summary, "", *_bullets(data.changes)])
    return ReviewSlide("summary", "What Changed", body)


def _impact_slide(data: ReviewData) -> ReviewSlide:
    body = _BodyWriter()
    if data.business_impact:
        body.add("Business Impact:", data.business_impact, "")
    if data.affected_areas:
        body.add("Affected Areas:", *_bullets(data.affected_areas), "")

    body.add("Quality Summary:")
    for label, check in data.quality_checks:
        body.add_highlighted(f"- {label}: ", STATUS_LABELS[check.status], STATUS_COLORS[check.status])
    return ReviewSlide("impact", "Impact Assessment", body.text, highlights=tuple(body.highlights))


def _risks_slide(data: ReviewData) -> ReviewSlide:
    risk_level = data.risk_level or "low"
    body = _BodyWriter()
    body.add_highlighted("Risk Level: ", risk_level.upper(), RISK_COLORS[risk_level])
    body.add("")

    if data.risk_factors:
        body.add("Risk Factors:", *_bullets(data.risk_factors), "")
    if data.issues_found:
        body.add("Issues Found:", *_bullets(data.issues_found))
    else:
        body.add("No blocking issues found.")
    return ReviewSlide("risks", "Risk Assessment", body.text, highlights=tuple(body.highlights))


def _verdict_slide(data: ReviewData) -> ReviewSlide:
    lines = [data.verdict_explanation, ""]
    if data.suggestions:
        lines.extend(["Suggestions:", *_bullets(data.suggestions)])
    return ReviewSlide(
        "verdict",
        f"Recommendation: {data.verdict}",
        "\n".join(lines),
        title_color=VERDICT_COLORS[data.verdict],
    )


def build_review_slides(data: ReviewData) -> list[ReviewSlide]:
    """Content of the title, summary, impact, risks and verdict slides, in deck order."""
    return [
        _title_slide(data),
        _summary_slide(data),
        _impact_slide(data),
        _risks_slide(data),
        _verdict_slide(data),
    ]


def review_content_operations(
    slide: ReviewSlide, title_id: str | None, body_id: str | None
) -> list[Operation]:
    """
    Fill a slide's title and body placeholders.

    A missing placeholder is skipped together with its styling.
    """
    requests: list[Operation] = []
    if title_id:
        requests.append(ops.insert_text(title_id, slide.title, insertion_index=0))
        if slide.title_color is not None:
            requests.append(ops.update_text_color(title_id, slide.title_color))
    if body_id:
        requests.append(ops.insert_text(body_id, slide.body, insertion_index=0))
        requests.extend(
            ops.update_text_color(body_id, h.color, start=h.start, end=h.end)
            for h in slide.highlights
        )
    return requests
