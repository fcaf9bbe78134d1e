"""Shared page geometry, typography and output constants for caption pages."""
from dataclasses import dataclass


@dataclass(frozen=True)
class CanvasSpec:
    """Pixel size of the finished page."""

    width_px: int
    height_px: int

    @property
    def size(self):
        return (self.width_px, self.height_px)


# Horizontal A4 at 300 DPI
TARGET_DPI: int = 300
A4_LANDSCAPE_300DPI = CanvasSpec(width_px=3508, height_px=2480)

# Font size is calibrated at 150 DPI and scaled linearly to TARGET_DPI
REFERENCE_DPI: int = 150
BASE_FONT_SIZE: float = 25.0

# Default family candidates tried in order when no font is given
FONT_CANDIDATES = (
    ("Arial", ["arial.ttf", "Arial.ttf", "ARIAL.TTF"]),
    ("DejaVuSans", ["DejaVuSans.ttf"]),
    ("LiberationSans", ["LiberationSans-Regular.ttf"]),
    ("NotoSans", ["NotoSans-Regular.ttf"]),
    ("Helvetica", ["Helvetica.ttc", "Helvetica.ttf"]),
    ("Verdana", ["verdana.ttf", "Verdana.ttf"]),
)
DEFAULT_FONT_FAMILY: str = "Arial"

SIDE_MARGIN: int = 50      # caption lines wrap at canvas width minus this
BOTTOM_MARGIN: int = 75    # reserved below the caption block
CAPTION_GAP: int = 25      # gap between photo bottom and first caption line
MIN_PHOTO_HEIGHT: int = 1  # pages whose caption leaves less room are rejected

BACKGROUND_COLOR = "white"
TEXT_COLOR = "black"

JPEG_QUALITY: int = 85

CAPTION_SEPARATOR: str = ": "
PHOTO_EXTENSION: str = ".png"
OUTPUT_EXTENSION: str = ".jpg"
