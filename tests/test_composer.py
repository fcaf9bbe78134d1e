import io

import pytest
from PIL import ImageFont, ImageOps

from photocaption.composer import available_photo_height, compose_page, layout_caption
from photocaption.constants import A4_LANDSCAPE_300DPI, BOTTOM_MARGIN, CAPTION_GAP, CanvasSpec
from photocaption.errors import (
    CaptionOverflowError,
    ItemError,
    PhotoDecodeError,
    PhotoNotFoundError,
)
from photocaption.text_utils import measure_lines, measure_text

SMALL_CANVAS = CanvasSpec(width_px=400, height_px=300)


def test_layout_centers_each_line(font):
    lines = ["short", "a somewhat longer line", "mid length"]
    placed = layout_caption(lines, font, 400, top=100)
    for p in placed:
        width, _ = measure_text(p.text, font)
        assert p.x == pytest.approx((400 - width) / 2)


def test_layout_stacks_lines_by_their_height(font):
    lines = ["first", "second", "third"]
    placed = layout_caption(lines, font, 400, top=10)
    assert placed[0].y == 10
    for previous, current in zip(placed, placed[1:]):
        assert current.y == pytest.approx(previous.y + previous.height)


def test_available_photo_height():
    assert available_photo_height(100, A4_LANDSCAPE_300DPI) == 2480 - 100 - BOTTOM_MARGIN


def test_page_has_canvas_size_and_photo_on_top(font, make_photo, tmp_path):
    photo = make_photo(tmp_path / "alpha.png", color=(220, 20, 20))
    lines = ["Hello world"]
    page = compose_page(str(photo), lines, font, SMALL_CANVAS, key="alpha")

    assert page.size == (400, 300)
    assert page.mode == "RGB"

    photo_height = available_photo_height(measure_lines(lines, font)[1], SMALL_CANVAS)
    r, g, b = page.getpixel((200, photo_height // 2))
    assert r > 200 and g < 60 and b < 60
    # left edge of the gap between photo and caption stays white
    assert page.getpixel((2, photo_height + CAPTION_GAP // 2)) == (255, 255, 255)


def test_caption_is_drawn_below_the_photo(font, make_photo, tmp_path):
    photo = make_photo(tmp_path / "alpha.png", color=(255, 255, 255))
    lines = ["Hello world"]
    page = compose_page(str(photo), lines, font, SMALL_CANVAS)
    photo_height = available_photo_height(measure_lines(lines, font)[1], SMALL_CANVAS)
    caption_area = page.crop((0, photo_height, 400, 300)).convert("L")
    assert caption_area.getextrema()[0] < 128


def test_transparent_photo_blends_over_white(font, make_photo, tmp_path):
    photo = make_photo(tmp_path / "clear.png", color=(0, 0, 0, 0), mode="RGBA")
    page = compose_page(str(photo), ["x"], font, SMALL_CANVAS)
    assert page.getpixel((200, 20)) == (255, 255, 255)


def test_photo_from_file_object(font, make_photo, tmp_path):
    photo = make_photo(tmp_path / "alpha.png")
    page = compose_page(io.BytesIO(photo.read_bytes()), ["caption"], font, SMALL_CANVAS)
    assert page.size == SMALL_CANVAS.size


def test_missing_photo_is_tagged_with_key(font, tmp_path):
    with pytest.raises(PhotoNotFoundError) as excinfo:
        compose_page(str(tmp_path / "beta.png"), ["text"], font, SMALL_CANVAS, key="beta")
    assert excinfo.value.key == "beta"
    assert "beta" in str(excinfo.value)


def test_undecodable_photo(font, tmp_path):
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"this is not a png")
    with pytest.raises(PhotoDecodeError) as excinfo:
        compose_page(str(broken), ["text"], font, SMALL_CANVAS, key="broken")
    assert isinstance(excinfo.value, ItemError)
    assert excinfo.value.key == "broken"


def test_caption_taller_than_canvas_is_rejected(font, make_photo, tmp_path):
    photo = make_photo(tmp_path / "alpha.png")
    lines = ["line"] * 40
    with pytest.raises(CaptionOverflowError) as excinfo:
        compose_page(str(photo), lines, font, SMALL_CANVAS, key="alpha")
    assert excinfo.value.key == "alpha"


def _ink_rows(placed, font):
    """Top and bottom canvas rows of the ink drawn for a placed line."""
    _, ink_top, _, ink_bottom = font.getbbox(placed.text)
    origin_y = placed.origin[1]
    return origin_y + ink_top, origin_y + ink_bottom


def test_consecutive_lines_do_not_overlap():
    font = ImageFont.load_default(size=50)
    lines = ["sun over a warm ocean", "Hello Flying Kites", "gypsy quay", "ÉTÉ"]
    placed = layout_caption(lines, font, 3508, top=0)
    for previous, current in zip(placed, placed[1:]):
        assert _ink_rows(previous, font)[1] <= _ink_rows(current, font)[0]


def test_ink_stays_inside_each_line_box():
    font = ImageFont.load_default(size=50)
    for p in layout_caption(["sun over a warm ocean", "Hello Flying Kites", "jumpy"], font, 3508, top=40):
        top, bottom = _ink_rows(p, font)
        assert p.y <= top and bottom <= p.y + p.height
        ink_left = p.origin[0] + font.getbbox(p.text)[0]
        assert ink_left == pytest.approx(p.x)


def test_drawn_caption_stays_inside_reserved_block(make_photo, tmp_path):
    font = ImageFont.load_default(size=20)
    photo = make_photo(tmp_path / "alpha.png", color=(255, 255, 255))
    lines = ["sun over a warm ocean", "Hello Flying Kites"]
    page = compose_page(str(photo), lines, font, SMALL_CANVAS)

    photo_height = available_photo_height(measure_lines(lines, font)[1], SMALL_CANVAS)
    block_top = photo_height + CAPTION_GAP
    block_bottom = block_top + measure_lines(lines, font)[1]
    ink = ImageOps.invert(page.convert("L")).getbbox()
    assert ink is not None
    assert ink[1] >= block_top - 1
    assert ink[3] <= block_bottom + 1
