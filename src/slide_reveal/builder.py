"""Static element request assembly."""

from . import operations as ops
from .colors import RgbColor
from .models import TextElementSpec
from .operations import Operation


def build_text_box(
    container_id: str,
    element_id: str,
    spec: TextElementSpec,
    resolved_color: RgbColor,
    text_override: str | None = None,
) -> list[Operation]:
    """
    Build the requests that create one styled text box.

    Args:
        container_id: Page (slide) object ID the box is placed on
        element_id: Object ID for the new text box
        spec: Element geometry, text and font settings
        resolved_color: Concrete foreground color for the whole text
        text_override: Text to insert instead of ``spec.text``

    Returns:
        createShape, insertText, updateTextStyle and updateParagraphStyle
        requests, in that order
    """
    text = spec.text if text_override is None else text_override
    return [
        ops.create_text_box(container_id, element_id, spec.x, spec.y, spec.w, spec.h),
        ops.insert_text(element_id, text),
        ops.update_text_style(
            element_id,
            font_size=spec.size,
            bold=spec.bold,
            color=resolved_color,
        ),
        ops.update_paragraph_style(element_id),
    ]


def build_background(page_id: str, color: RgbColor) -> Operation:
    """Build the request that fills a slide background with a solid color."""
    return ops.update_page_background(page_id, color)
