"""Batch orchestrator that turns a caption file and a photo folder into caption pages."""
from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Union
import logging

from .caption_store import load_captions
from .composer import compose_page
from .constants import (
    A4_LANDSCAPE_300DPI,
    JPEG_QUALITY,
    OUTPUT_EXTENSION,
    PHOTO_EXTENSION,
    SIDE_MARGIN,
    TARGET_DPI,
    CanvasSpec,
)
from .errors import ItemError, PageEncodeError
from .fonts import FontSpec, default_font_spec, load_font
from .pdf_bundle import write_pages_pdf
from .text_utils import wrap_text_to_width


@dataclass(frozen=True)
class BatchConfig:
    """Everything one batch run needs, passed by value into the pipeline."""

    photos_dir: Path
    output_dir: Path
    captions_path: Path
    canvas: CanvasSpec = A4_LANDSCAPE_300DPI
    font: FontSpec = field(default_factory=default_font_spec)
    # None lets the executor pick its default pool size
    max_workers: Optional[int] = None
    jpeg_quality: int = JPEG_QUALITY
    pdf_path: Optional[Path] = None

    def __post_init__(self):
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if not 0 <= self.jpeg_quality <= 100:
            raise ValueError("jpeg_quality must be between 0 and 100")


@dataclass
class BatchResult:
    written: Dict[str, Path] = field(default_factory=dict)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def output_path_for(key: str, output_dir: Union[str, Path]) -> Path:
    """Output file for a key: any extension on the key is replaced by the encoder's."""
    return Path(output_dir) / (Path(key).stem + OUTPUT_EXTENSION)


def photo_path_for(key: str, photos_dir: Union[str, Path]) -> Path:
    return Path(photos_dir) / (key + PHOTO_EXTENSION)


def process_item(key: str, text: str, config: BatchConfig) -> Path:
    """Compose and save the page for one caption entry and return the written path."""
    try:
        font = load_font(config.font)
        lines = wrap_text_to_width(text, font, config.canvas.width_px - SIDE_MARGIN)
        page = compose_page(photo_path_for(key, config.photos_dir), lines, font, config.canvas, key=key)

        output_path = output_path_for(key, config.output_dir)
        try:
            page.save(output_path, format="JPEG", quality=config.jpeg_quality, dpi=(TARGET_DPI, TARGET_DPI))
        except (OSError, ValueError) as exc:
            raise PageEncodeError(f"Cannot write {output_path}: {exc}", key=key) from exc
    except ItemError:
        raise
    except Exception as exc:
        raise ItemError(f"{type(exc).__name__}: {exc}", key=key) from exc
    return output_path


def run_batch(config: BatchConfig, captions: Optional[Mapping[str, str]] = None) -> BatchResult:
    """Compose a page for every caption concurrently.

    Caption-file errors are raised once and stop the run. A failure for one
    item is logged with its key and does not affect the other items.

    Args:
        config: paths and settings for the run.
        captions: already loaded captions; read from config.captions_path when None.

    Returns:
        The written output path per key and the failure description per key.
    """
    logger = logging.getLogger(__name__)
    if captions is None:
        captions = load_captions(str(config.captions_path), logger=logger)

    logger.info("Processing %d captioned photos...", len(captions))
    Path(config.output_dir).mkdir(parents=True, exist_ok=True)

    result = BatchResult()
    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        future_to_key = {
            executor.submit(process_item, key, text, config): key
            for key, text in captions.items()
        }
        for future in as_completed(future_to_key):
            key = future_to_key[future]
            try:
                result.written[key] = future.result()
                logger.debug("Wrote %s", result.written[key])
            except Exception as exc:
                logger.error("Failed to process %s: %s", key, exc)
                result.failed[key] = str(exc)

    if config.pdf_path and result.written:
        pages = [result.written[key] for key in sorted(result.written)]
        try:
            write_pages_pdf(pages, config.pdf_path, dpi=TARGET_DPI)
        except Exception:
            logger.exception("Failed to write PDF bundle %s", config.pdf_path)

    logger.info(
        "🎉 All images processed!\n\n"
        "📥 Captions: %s\n"
        "🖼️ Photos: %s\n"
        "📤 Output: %s\n"
        "✅ Written: %d\n"
        "❌ Failed: %d",
        config.captions_path,
        config.photos_dir,
        config.output_dir,
        len(result.written),
        len(result.failed),
    )
    return result


def submit_batch(config: BatchConfig, executor: Optional[ThreadPoolExecutor] = None) -> "Future[BatchResult]":
    """Start run_batch on a background thread and return its future.

    When no executor is given a single-worker one is created and shut down
    once the batch has been handed to it.
    """
    if executor is not None:
        return executor.submit(run_batch, config)
    background = ThreadPoolExecutor(max_workers=1, thread_name_prefix="caption-pages")
    try:
        return background.submit(run_batch, config)
    finally:
        background.shutdown(wait=False)


def main(
    photos_dir: str,
    output_dir: str,
    captions_path: str,
    font_family: Optional[str] = None,
    base_font_size: Optional[float] = None,
    max_workers: Optional[int] = None,
    jpeg_quality: int = JPEG_QUALITY,
    pdf_path: Optional[str] = None,
) -> BatchResult:
    font_kwargs = {}
    if font_family:
        font_kwargs["family"] = font_family
    if base_font_size is not None:
        font_kwargs["base_size"] = base_font_size

    config = BatchConfig(
        photos_dir=Path(photos_dir),
        output_dir=Path(output_dir),
        captions_path=Path(captions_path),
        font=default_font_spec(**font_kwargs),
        max_workers=max_workers,
        jpeg_quality=jpeg_quality,
        pdf_path=Path(pdf_path) if pdf_path else None,
    )
    return run_batch(config)
