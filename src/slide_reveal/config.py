"""Deck config and review data loading and validation."""

import json
from pathlib import Path
from typing import Any

from .colors import ColorSpec, RgbColor
from .errors import ConfigError
from .models import DeckConfig, QualityCheck, ReviewData, SlideSpec, SlideTarget, TextElementSpec

_ANIMATION_MODES = ("matrix",)
_REQUIRED_ELEMENT_FIELDS = ("text", "x", "y", "w", "h", "size")
_REVIEW_STATUSES = ("pass", "warning", "issue")
_RISK_LEVELS = ("low", "medium", "high")
_VERDICTS = ("APPROVE", "REQUEST_CHANGES", "COMMENT")
_QUALITY_FIELDS = ("codeQuality", "tests", "security", "performance")


def load_deck_config(path: str | Path) -> DeckConfig:
    """Load a deck config from a JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return parse_deck_config(f.read())
    except FileNotFoundError:
        raise ConfigError(f"File '{path}' not found")


def parse_deck_config(raw: str) -> DeckConfig:
    """Parse a deck config from a JSON document."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON: {e}")
    return deck_config_from_dict(data)


def deck_config_from_dict(data: Any) -> DeckConfig:
    if not isinstance(data, dict):
        raise ConfigError("Deck config must be a JSON object")

    slides = data.get("slides")
    if not isinstance(slides, list):
        raise ConfigError("Deck config requires a 'slides' list")

    theme = data.get("theme") or {}
    if not isinstance(theme, dict):
        raise ConfigError("'theme' must be an object")
    theme_colors = theme.get("colors") or {}
    if not isinstance(theme_colors, dict):
        raise ConfigError("'theme.colors' must be an object of name -> color")

    return DeckConfig(
        title=str(data.get("title") or "Untitled presentation"),
        slides=tuple(_parse_slide(slide, i) for i, slide in enumerate(slides)),
        theme={name: _parse_rgb(value, f"theme color '{name}'") for name, value in theme_colors.items()},
        presentation_id=data.get("presentationId"),
        append=bool(data.get("append", False)),
        update_slide=parse_slide_target(data.get("updateSlide")),
    )


def _parse_slide(data: Any, index: int) -> SlideSpec:
    where = f"slides[{index}]"
    if not isinstance(data, dict):
        raise ConfigError(f"{where} must be an object")
    elements = data.get("elements")
    if not isinstance(elements, list):
        raise ConfigError(f"{where} requires an 'elements' list")

    background = data.get("background")
    return SlideSpec(
        elements=tuple(
            _parse_element(element, f"{where}.elements[{i}]") for i, element in enumerate(elements)
        ),
        background=None if background is None else parse_color(background, f"{where}.background"),
        notes=data.get("notes") or None,
    )


def _parse_element(data: Any, where: str) -> TextElementSpec:
    if not isinstance(data, dict):
        raise ConfigError(f"{where} must be an object")
    missing = [name for name in _REQUIRED_ELEMENT_FIELDS if name not in data]
    if missing:
        raise ConfigError(f"{where} is missing {', '.join(missing)}")

    text = data["text"]
    if not isinstance(text, str) or not text:
        raise ConfigError(f"{where}.text must be a non-empty string")

    animate = data.get("animate")
    if animate is not None and animate not in _ANIMATION_MODES:
        raise ConfigError(
            f"{where}.animate '{animate}' is not supported. Available: {', '.join(_ANIMATION_MODES)}"
        )

    try:
        x, y, w, h, size = (float(data[name]) for name in ("x", "y", "w", "h", "size"))
    except (TypeError, ValueError):
        raise ConfigError(f"{where} geometry and size must be numbers")

    return TextElementSpec(
        text=text,
        x=x,
        y=y,
        w=w,
        h=h,
        size=size,
        color=parse_color(data.get("color", "white"), f"{where}.color"),
        bold=bool(data.get("bold", False)),
        animate=animate,
    )


def parse_color(value: Any, where: str = "color") -> ColorSpec:
    """Accept a color name, ``{red, green, blue}`` object, or ``[r, g, b]`` list."""
    if isinstance(value, str):
        return value
    return _parse_rgb(value, where)


def _parse_rgb(value: Any, where: str) -> RgbColor:
    if isinstance(value, dict):
        components = [value.get(key, 0.0) for key in ("red", "green", "blue")]
    elif isinstance(value, (list, tuple)) and len(value) == 3:
        components = list(value)
    else:
        raise ConfigError(f"{where} must be a color name, an RGB object or a 3-item list")

    try:
        red, green, blue = (float(c) for c in components)
    except (TypeError, ValueError):
        raise ConfigError(f"{where} components must be numbers")
    if not all(0.0 <= c <= 1.0 for c in (red, green, blue)):
        raise ConfigError(f"{where} components must be within [0, 1]")
    return RgbColor(red, green, blue)


def parse_slide_target(value: Any) -> SlideTarget | None:
    if value is None:
        return None
    if value == "last":
        return "last"
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ConfigError(f"'updateSlide' must be a slide index or 'last', got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ConfigError(f"'updateSlide' must be a slide index or 'last', got {value!r}")



def load_review_data(path: str | Path) -> ReviewData:
    """Load pull request review data from a JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return parse_review_data(f.read())
    except FileNotFoundError:
        raise ConfigError(f"File '{path}' not found")


def parse_review_data(raw: str) -> ReviewData:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON: {e}")
    return review_data_from_dict(data)


def review_data_from_dict(data: Any) -> ReviewData:
    """
    Validate review JSON (camelCase keys) into ``ReviewData``.

    The PR fields, summary, quality assessment, verdict and its explanation
    are required. List fields default to empty.
    """
    if not isinstance(data, dict):
        raise ConfigError("Review data must be a JSON object")

    pr_number = data.get("prNumber")
    if isinstance(pr_number, bool) or not isinstance(pr_number, int):
        raise ConfigError("'prNumber' must be an integer")
    pr_title = _require_str(data, "prTitle")
    if not pr_title:
        raise ConfigError("'prTitle' must not be empty")

    quality = data.get("qualityAssessment")
    if not isinstance(quality, dict):
        raise ConfigError("'qualityAssessment' must be an object")
    checks = {name: _parse_quality_check(quality.get(name), name) for name in _QUALITY_FIELDS}

    risk_level = data.get("riskLevel")
    if risk_level is not None and risk_level not in _RISK_LEVELS:
        raise ConfigError(f"'riskLevel' must be one of: {', '.join(_RISK_LEVELS)}")
    business_impact = data.get("businessImpact")
    if business_impact is not None and not isinstance(business_impact, str):
        raise ConfigError("'businessImpact' must be a string")

    return ReviewData(
        pr_number=pr_number,
        pr_title=pr_title,
        pr_author=_require_str(data, "prAuthor"),
        pr_date=_require_str(data, "prDate"),
        repository=_require_str(data, "repository"),
        summary=_require_str(data, "summary"),
        code_quality=checks["codeQuality"],
        tests=checks["tests"],
        security=checks["security"],
        performance=checks["performance"],
        verdict=_require_choice(data, "verdict", _VERDICTS),
        verdict_explanation=_require_str(data, "verdictExplanation"),
        changes=_str_list(data, "changes"),
        issues_found=_str_list(data, "issuesFound"),
        suggestions=_str_list(data, "suggestions"),
        business_impact=business_impact or None,
        risk_level=risk_level,
        risk_factors=_str_list(data, "riskFactors"),
        affected_areas=_str_list(data, "affectedAreas"),
    )


def _parse_quality_check(value: Any, name: str) -> QualityCheck:
    where = f"qualityAssessment.{name}"
    if not isinstance(value, dict):
        raise ConfigError(f"'{where}' must be an object with a status")
    notes = value.get("notes", "")
    if not isinstance(notes, str):
        raise ConfigError(f"'{where}.notes' must be a string")
    return QualityCheck(status=_require_choice(value, "status", _REVIEW_STATUSES, where), notes=notes)


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string")
    return value


def _require_choice(
    data: dict[str, Any], key: str, choices: tuple[str, ...], where: str | None = None
) -> Any:
    value = data.get(key)
    if value not in choices:
        name = f"{where}.{key}" if where else key
        raise ConfigError(f"'{name}' must be one of: {', '.join(choices)}")
    return value


def _str_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return tuple(value)
