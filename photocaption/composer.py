"""Composition of one caption page: photo on top, centered caption lines below."""
from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, List, Optional, Sequence, Union
import logging
import os

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from .constants import (
    A4_LANDSCAPE_300DPI,
    BACKGROUND_COLOR,
    BOTTOM_MARGIN,
    CAPTION_GAP,
    MIN_PHOTO_HEIGHT,
    TEXT_COLOR,
    CanvasSpec,
)
from .draw import paste_image_in_rect
from .errors import CaptionOverflowError, PhotoDecodeError, PhotoNotFoundError
from .text_utils import line_box, measure_lines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacedLine:
    """One caption line: (x, y) is the top-left of its line box on the canvas."""

    text: str
    x: float
    y: float
    width: float
    height: float
    # offset of the line box from the text drawing origin
    offset_x: float = 0.0
    offset_y: float = 0.0

    @property
    def origin(self):
        return (self.x - self.offset_x, self.y - self.offset_y)


def available_photo_height(caption_height: float, canvas: CanvasSpec = A4_LANDSCAPE_300DPI) -> int:
    """Height left for the photo once the caption block and bottom margin are reserved."""
    return canvas.height_px - int(caption_height) - BOTTOM_MARGIN


def layout_caption(lines: Sequence[str], font: ImageFont.FreeTypeFont, canvas_width: int, top: float) -> List[PlacedLine]:
    """Center every line horizontally and stack the lines downwards from top."""
    placed: List[PlacedLine] = []
    y = float(top)
    for line in lines:
        left, top_offset, width, height = line_box(line, font)
        x = (canvas_width - width) / 2
        placed.append(PlacedLine(text=line, x=x, y=y, width=width, height=height, offset_x=left, offset_y=top_offset))
        y += height
    return placed


def _open_photo(photo: Union[str, os.PathLike, BinaryIO], key: Optional[str]) -> Image.Image:
    try:
        img = Image.open(photo)
        img.load()
    except FileNotFoundError as exc:
        raise PhotoNotFoundError(f"Photo not found: {photo}", key=key) from exc
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise PhotoDecodeError(f"Cannot decode photo {photo}: {exc}", key=key) from exc
    return img


def compose_page(
    photo: Union[str, os.PathLike, BinaryIO],
    lines: Sequence[str],
    font: ImageFont.FreeTypeFont,
    canvas: CanvasSpec = A4_LANDSCAPE_300DPI,
    key: Optional[str] = None,
) -> Image.Image:
    """Compose a page from a photo and already wrapped caption lines.

    The photo is stretched to the full canvas width and to whatever height the
    caption block leaves free, then pasted at the top-left corner of a white
    canvas. Caption lines are drawn below it, each centered on its own.

    Args:
        photo: path or binary file object of the source photo.
        lines: wrapped caption lines, top to bottom.
        font: Pillow font used both to measure and to draw the lines.
        canvas: size of the finished page.
        key: item key attached to any error raised.

    Returns:
        The composed RGB page.

    Raises:
        PhotoNotFoundError: the photo file does not exist.
        PhotoDecodeError: the photo cannot be decoded.
        CaptionOverflowError: the caption is too tall to leave room for the photo.
    """
    img = _open_photo(photo, key)

    _, caption_height = measure_lines(lines, font)
    photo_height = available_photo_height(caption_height, canvas)
    if photo_height < MIN_PHOTO_HEIGHT:
        raise CaptionOverflowError(
            f"Caption block is {caption_height:.0f}px tall and leaves {photo_height}px for the photo "
            f"on a {canvas.width_px}x{canvas.height_px} canvas",
            key=key,
        )

    page = Image.new("RGB", canvas.size, BACKGROUND_COLOR)
    paste_image_in_rect(page, img, 0, 0, canvas.width_px, photo_height)

    draw = ImageDraw.Draw(page)
    for placed in layout_caption(lines, font, canvas.width_px, photo_height + CAPTION_GAP):
        draw.text(placed.origin, placed.text, font=font, fill=TEXT_COLOR)

    logger.debug(
        "Composed page%s: photo %dx%d, %d caption line(s)",
        f" for {key}" if key else "", canvas.width_px, photo_height, len(lines),
    )
    return page
