"""Text utilities relying on Pillow font metrics."""
from typing import List, Sequence, Tuple

from PIL import ImageFont


def line_box(text: str, font: ImageFont.FreeTypeFont) -> Tuple[float, float, float, float]:
    """Return (left, top, width, height) of the box a single line occupies.

    left is the ink offset from the drawing origin. The vertical extent is the
    font's natural line height (ascent + descent), grown to cover any glyph
    that reaches past it; top is then the offset of the box from the origin.
    """
    left, ink_top, right, ink_bottom = font.getbbox(text)
    ascent, descent = font.getmetrics()
    top = min(0, ink_top)
    bottom = max(ascent + descent, ink_bottom)
    return left, top, right - left, bottom - top


def measure_text(text: str, font: ImageFont.FreeTypeFont) -> Tuple[float, float]:
    """Return the (width, height) of a single line: ink width and natural line height."""
    _, _, width, height = line_box(text, font)
    return width, height


def measure_lines(lines: Sequence[str], font: ImageFont.FreeTypeFont) -> Tuple[float, float]:
    """Return the (width, height) of lines stacked top-to-bottom with no extra gap.

    Width is the widest line, height the sum of each line's own height.
    """
    width = 0.0
    height = 0.0
    for line in lines:
        w, h = measure_text(line, font)
        width = max(width, w)
        height += h
    return width, height


def wrap_text_to_width(text: str, font: ImageFont.FreeTypeFont, max_width: float) -> List[str]:
    """Wrap text into lines narrower than max_width using Pillow width metrics.

    Words are split on single spaces and never broken; a word that is wider
    than max_width on its own gets a line to itself and overflows.
    Returns a list of lines (strings).
    """
    if not text:
        return []
    lines: List[str] = []
    current = ""
    for w in text.split(" "):
        candidate = current + " " + w if current else w
        if measure_text(candidate, font)[0] < max_width:
            current = candidate
        else:
            if current:
                lines.append(current)
            current = w
    if current:
        lines.append(current)
    return lines
