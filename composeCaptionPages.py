import argparse
import logging
import sys

from photocaption.errors import CaptionPagesError
from photocaption.generator import main
from photocaption.constants import BASE_FONT_SIZE, DEFAULT_FONT_FAMILY, JPEG_QUALITY


def build_parser():
    parser = argparse.ArgumentParser(description="Compose A4 landscape pages of photos with centered captions")
    parser.add_argument("photos_folder", help="Folder containing one <key>.png per caption")
    parser.add_argument("output_folder", help="Folder that receives one <key>.jpg per caption")
    parser.add_argument("caption_file", help="UTF-8 text file with one '<key>: <caption>' entry per line")
    parser.add_argument("--workers", type=int, default=None, help="Number of pages composed in parallel (default: executor default)")
    parser.add_argument("--font", default=DEFAULT_FONT_FAMILY, help="Font family name or path to a .ttf/.otf file (default: %(default)s)")
    parser.add_argument("--base-font-size", type=float, default=BASE_FONT_SIZE, help="Caption size in points at 150 DPI, scaled to 300 DPI (default: %(default)s)")
    parser.add_argument("--quality", type=int, default=JPEG_QUALITY, help="JPEG quality 0-100 (default: %(default)s)")
    parser.add_argument("--pdf", help="Also gather all finished pages into this PDF file", required=False)
    parser.add_argument("--verbose", action="store_true", help="Log debug details for every page")
    return parser


def run(argv=None):
    """Run the batch from command-line arguments and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be at least 1")
    if not 0 <= args.quality <= 100:
        parser.error("--quality must be between 0 and 100")
    if args.base_font_size <= 0:
        parser.error("--base-font-size must be positive")

    # configure basic logging to console so users are kept up-to-date
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")
    try:
        result = main(
            args.photos_folder,
            args.output_folder,
            args.caption_file,
            font_family=args.font,
            base_font_size=args.base_font_size,
            max_workers=args.workers,
            jpeg_quality=args.quality,
            pdf_path=args.pdf,
        )
    except CaptionPagesError as exc:
        logging.getLogger(__name__).error("%s", exc)
        return 1
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(run())
