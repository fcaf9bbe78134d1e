"""Drawing helpers for placing images on a Pillow canvas or a ReportLab page."""
from PIL import Image
from reportlab.lib.utils import ImageReader


def paste_image_in_rect(canvas, pil_img, x, y, width, height):
    """Paste a PIL image resized to exactly (width, height) with its top-left corner at (x, y).
    The aspect ratio is not preserved. Transparent pixels blend over the canvas.
    """
    img = pil_img.convert("RGBA").resize((width, height), Image.Resampling.BICUBIC)
    canvas.paste(img, (x, y), img)


def draw_full_page_image(c, pil_img, page_width, page_height):
    """Fill a PDF page with one finished caption page; page size already matches the image at its DPI."""
    img_reader = ImageReader(pil_img)
    c.drawImage(img_reader, 0, 0, width=page_width, height=page_height)
