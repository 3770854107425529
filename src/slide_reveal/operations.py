"""Builders for the Slides API request shapes this package emits."""

from typing import Any

from .colors import RgbColor, to_backend_units
from .constants import FONT_FAMILY, LINE_SPACING, PARAGRAPH_ALIGNMENT, TEXT_STYLE_FIELDS

Operation = dict[str, Any]


def _transform(x: float, y: float) -> dict[str, Any]:
    return {
        "scaleX": 1,
        "scaleY": 1,
        "translateX": to_backend_units(x),
        "translateY": to_backend_units(y),
        "unit": "EMU",
    }


def create_slide(
    slide_id: str, insertion_index: int | None = None, layout: str = "BLANK"
) -> Operation:
    """Create a slide from a predefined layout; without an index it is appended."""
    request: dict[str, Any] = {
        "objectId": slide_id,
        "slideLayoutReference": {"predefinedLayout": layout},
    }
    if insertion_index is not None:
        request["insertionIndex"] = insertion_index
    return {"createSlide": request}


def create_text_box(
    page_id: str, object_id: str, x: float, y: float, w: float, h: float
) -> Operation:
    """Create a TEXT_BOX shape. Position and size are given in points."""
    return {
        "createShape": {
            "objectId": object_id,
            "shapeType": "TEXT_BOX",
            "elementProperties": {
                "pageObjectId": page_id,
                "size": {
                    "width": {"magnitude": to_backend_units(w), "unit": "EMU"},
                    "height": {"magnitude": to_backend_units(h), "unit": "EMU"},
                },
                "transform": _transform(x, y),
            },
        }
    }


def insert_text(object_id: str, text: str, insertion_index: int | None = None) -> Operation:
    request: dict[str, Any] = {"objectId": object_id, "text": text}
    if insertion_index is not None:
        request["insertionIndex"] = insertion_index
    return {"insertText": request}


def delete_all_text(object_id: str) -> Operation:
    return {"deleteText": {"objectId": object_id, "textRange": {"type": "ALL"}}}


def update_text_style(
    object_id: str,
    *,
    font_size: float,
    bold: bool,
    color: RgbColor,
    start: int | None = None,
    end: int | None = None,
) -> Operation:
    """
    Style a text range with the package font.

    Without ``start``/``end`` the style applies to the whole text; otherwise
    it covers the fixed range ``[start, end)``.
    """
    request: dict[str, Any] = {
        "objectId": object_id,
        "style": {
            "fontFamily": FONT_FAMILY,
            "fontSize": {"magnitude": font_size, "unit": "PT"},
            "foregroundColor": {"opaqueColor": {"rgbColor": color.to_api()}},
            "bold": bold,
        },
        "fields": TEXT_STYLE_FIELDS,
    }
    if start is not None and end is not None:
        request["textRange"] = {"type": "FIXED_RANGE", "startIndex": start, "endIndex": end}
    return {"updateTextStyle": request}


def update_text_color(
    object_id: str, color: RgbColor, start: int | None = None, end: int | None = None
) -> Operation:
    """Recolor text while keeping the font the layout gave it."""
    request: dict[str, Any] = {
        "objectId": object_id,
        "style": {"foregroundColor": {"opaqueColor": {"rgbColor": color.to_api()}}},
        "fields": "foregroundColor",
    }
    if start is not None and end is not None:
        request["textRange"] = {"type": "FIXED_RANGE", "startIndex": start, "endIndex": end}
    return {"updateTextStyle": request}


def update_paragraph_style(object_id: str) -> Operation:
    return {
        "updateParagraphStyle": {
            "objectId": object_id,
            "style": {"lineSpacing": LINE_SPACING, "alignment": PARAGRAPH_ALIGNMENT},
            "fields": "lineSpacing,alignment",
        }
    }


def move_element(object_id: str, x: float, y: float) -> Operation:
    """Place an element at an absolute position given in points."""
    return {
        "updatePageElementTransform": {
            "objectId": object_id,
            "applyMode": "ABSOLUTE",
            "transform": _transform(x, y),
        }
    }


def delete_object(object_id: str) -> Operation:
    return {"deleteObject": {"objectId": object_id}}


def update_page_background(page_id: str, color: RgbColor) -> Operation:
    return {
        "updatePageProperties": {
            "objectId": page_id,
            "pageProperties": {
                "pageBackgroundFill": {"solidFill": {"color": {"rgbColor": color.to_api()}}},
            },
            "fields": "pageBackgroundFill",
        }
    }
