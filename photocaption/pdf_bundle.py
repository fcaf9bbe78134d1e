"""Gathering of finished caption pages into one printable PDF."""
from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union
import logging

from PIL import Image
from reportlab.pdfgen import canvas

from .constants import TARGET_DPI
from .draw import draw_full_page_image


def write_pages_pdf(
    image_paths: Sequence[Union[str, Path]],
    output_pdf_path: Union[str, Path],
    dpi: int = TARGET_DPI,
) -> int:
    """Write one PDF page per image, in the given order.

    Page size follows each image's pixel size at the given DPI, so a
    3508x2480 page at 300 DPI prints as A4 landscape.

    Returns:
        The number of pages written.
    """
    logger = logging.getLogger(__name__)
    output_pdf_path = Path(output_pdf_path)
    output_pdf_path.parent.mkdir(parents=True, exist_ok=True)

    # Ensure the path is a string for reportlab
    c = canvas.Canvas(str(output_pdf_path))
    pages = 0
    for path in image_paths:
        with Image.open(path) as img:
            px_width, px_height = img.size
            page_width = px_width * 72.0 / dpi
            page_height = px_height * 72.0 / dpi
            c.setPageSize((page_width, page_height))
            draw_full_page_image(c, img, page_width, page_height)
        c.showPage()
        pages += 1
    c.save()

    logger.info("Wrote %d page(s) to %s", pages, output_pdf_path)
    return pages
