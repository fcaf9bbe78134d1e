from pathlib import Path

import pytest
from PIL import Image, ImageFont


@pytest.fixture
def font():
    return ImageFont.load_default(size=20)


@pytest.fixture
def make_photo():
    def _make(path: Path, size=(64, 48), color=(200, 30, 30), mode="RGB"):
        Image.new(mode, size, color).save(path, format="PNG")
        return path
    return _make


@pytest.fixture
def bundled_font(monkeypatch):
    """Make the batch runner draw with Pillow's bundled font instead of a system one."""
    from photocaption import generator

    monkeypatch.setattr(generator, "load_font", lambda spec: ImageFont.load_default(size=spec.size_pt))
