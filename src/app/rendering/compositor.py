"""Text overlay onto invitation model images."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image, ImageColor, ImageDraw, ImageFont, UnidentifiedImageError

from app.exceptions import ServiceFailureError
from app.schemas import ErrorCodes, TextElement


if TYPE_CHECKING:
    from app.schemas import Record, RenderSettings


logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9_-]+", re.IGNORECASE)
_FALLBACK_COLOR = (0, 0, 0, 255)
PLACEHOLDER_TABLE = "01"

FontType = ImageFont.FreeTypeFont | ImageFont.ImageFont


def build_elements(
    record: Record, settings: RenderSettings, *, table_placeholder: str = ""
) -> list[TextElement]:
    """Text elements for one invitation: the name, then the table if enabled."""
    style = {
        "font_family": settings.font_family,
        "font_size": settings.font_size,
        "color": settings.color,
    }
    elements = [TextElement(text=record.name, x=settings.x, y=settings.y, **style)]
    if settings.draws_table:
        elements.append(
            TextElement(
                text=record.table or table_placeholder,
                x=settings.tx,
                y=settings.ty,
                **style,
            )
        )
    return elements


def output_filename(index: int, name: str) -> str:
    """Zero-padded, filesystem-safe PNG name for the record at ``index``."""
    safe_name = _UNSAFE_FILENAME_CHARS.sub("_", name)
    return f"{index + 1:03d}-{safe_name}.png"


def compose_image(
    model_path: str | Path, out_path: str | Path, elements: list[TextElement]
) -> Path:
    """Draw ``elements`` onto the model image and save the result as PNG.

    Args:
        model_path: The uploaded template image.
        out_path: Destination PNG file.
        elements: Text to draw, in order.

    Returns:
        The written path.

    Raises:
        ServiceFailureError: The model is a PDF or not a readable image.
    """
    model_path = Path(model_path)
    out_path = Path(out_path)

    if model_path.suffix.lower() == ".pdf":
        logger.warning("PDF model %s cannot be rasterized", model_path.name)
        raise ServiceFailureError(
            component="rendering",
            error_code=ErrorCodes.RENDER_UNSUPPORTED_MODEL,
            message="PDF models are not supported. Upload a PNG or JPEG image.",
            details={"model": model_path.name},
        )

    try:
        with Image.open(model_path) as source:
            image = source.convert("RGBA")
    except (UnidentifiedImageError, OSError) as exc:
        raise ServiceFailureError(
            component="rendering",
            error_code=ErrorCodes.RENDER_INVALID_MODEL,
            message=f"Model image could not be read: {exc}",
            details={"model": model_path.name},
        ) from exc

    # Pillow places text by its top-left corner ("la" anchor) by default.
    draw = ImageDraw.Draw(image)
    for element in elements:
        draw.text(
            (element.x, element.y),
            element.text,
            fill=_parse_color(element.color),
            font=_load_font(element.font_family, element.font_size),
        )

    out_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(out_path, format="PNG")
    return out_path


def _parse_color(color: str) -> tuple[int, ...]:
    try:
        return ImageColor.getcolor(color, "RGBA")
    except ValueError:
        logger.warning("Unknown color %r, drawing in black", color)
        return _FALLBACK_COLOR


@lru_cache(maxsize=32)
def _load_font(font_family: str, font_size: int) -> FontType:
    """Resolve a font by name or file, falling back to Pillow's default."""
    for candidate in (font_family, f"{font_family}.ttf"):
        try:
            return ImageFont.truetype(candidate, font_size)
        except OSError:
            continue
    logger.debug("Font %s not found, using the default font", font_family)
    return ImageFont.load_default(size=font_size)


__all__ = [
    "PLACEHOLDER_TABLE",
    "build_elements",
    "compose_image",
    "output_filename",
]
