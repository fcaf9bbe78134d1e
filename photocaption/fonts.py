import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from PIL import ImageFont

from .constants import (
    BASE_FONT_SIZE,
    DEFAULT_FONT_FAMILY,
    FONT_CANDIDATES,
    REFERENCE_DPI,
    TARGET_DPI,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontSpec:
    """Font family (name or path to a TrueType file) and size in points at the target DPI."""

    family: str
    size_pt: float


def scaled_font_size(base_size: float = BASE_FONT_SIZE, target_dpi: int = TARGET_DPI, reference_dpi: int = REFERENCE_DPI) -> float:
    """Scale a font size calibrated at reference_dpi to target_dpi."""
    return base_size * (target_dpi / float(reference_dpi))


def default_font_spec(family: str = DEFAULT_FONT_FAMILY, base_size: float = BASE_FONT_SIZE) -> FontSpec:
    if base_size <= 0:
        raise ValueError(f"Font size must be positive, got {base_size}")
    return FontSpec(family=family, size_pt=scaled_font_size(base_size))


def _system_font_dirs():
    return [
        # Common Windows fonts directory
        os.path.join(os.environ.get("WINDIR", r"C:\\Windows"), "Fonts"),
        "/usr/share/fonts",
        "/usr/local/share/fonts",
        os.path.expanduser("~/.fonts"),
        os.path.expanduser("~/.local/share/fonts"),
        "/Library/Fonts",
        "/System/Library/Fonts",
        os.path.expanduser("~/Library/Fonts"),
    ]


def _find_file(possible_names):
    # Fonts dropped next to the working directory win over installed ones
    for name in possible_names:
        p = os.path.abspath(name)
        if os.path.isfile(p):
            return p
    wanted = set(possible_names)
    for d in _system_font_dirs():
        if not os.path.isdir(d):
            continue
        for root, _dirs, files in os.walk(d):
            for name in files:
                if name in wanted:
                    return os.path.join(root, name)
    return None


@lru_cache(maxsize=None)
def resolve_font_path(family: str) -> Optional[str]:
    """Find a TrueType file for a family name or return the family if it is already a path.

    The requested family is tried first, then the default sans-serif candidates.
    Returns None when nothing is installed.
    """
    if os.path.isfile(family):
        return family

    requested = [names for name, names in FONT_CANDIDATES if name.lower() == family.lower()]
    if not requested:
        requested = [[f"{family}.ttf", f"{family}.otf", f"{family}-Regular.ttf"]]
    others = [names for name, names in FONT_CANDIDATES if name.lower() != family.lower()]

    for names in requested + others:
        path = _find_file(names)
        if path:
            logger.debug("Resolved font %s to %s", family, path)
            return path
    logger.warning("No TrueType font found for %s; using Pillow's bundled font", family)
    return None


def load_font(spec: FontSpec) -> ImageFont.FreeTypeFont:
    """Load a Pillow font for a FontSpec, falling back to Pillow's bundled font at the same size."""
    path = resolve_font_path(spec.family)
    if path:
        try:
            return ImageFont.truetype(path, spec.size_pt)
        except OSError:
            logger.warning("Could not load font file %s; using Pillow's bundled font", path)
    return ImageFont.load_default(size=spec.size_pt)
