"""Loading of the `<key>: <caption>` text file into an in-memory mapping."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .constants import CAPTION_SEPARATOR
from .errors import CaptionEncodingError, CaptionFileError
from .precheck import find_duplicate_keys


def parse_caption_lines(lines: Iterable[str], separator: str = CAPTION_SEPARATOR) -> List[Tuple[str, str]]:
    """Split each line once on the separator and keep the well-formed (key, text) pairs.

    A line is kept only when the separator occurs exactly once and the key is
    non-empty; anything else is dropped without error.
    """
    logger = logging.getLogger(__name__)
    entries: List[Tuple[str, str]] = []
    for lineno, line in enumerate(lines, start=1):
        parts = line.split(separator)
        if len(parts) != 2:
            if line.strip():
                logger.debug("Skipping malformed caption line %d: %r", lineno, line)
            continue
        key, text = parts
        if not key:
            logger.debug("Skipping caption line %d with an empty key", lineno)
            continue
        entries.append((key, text))
    return entries


def load_captions(path: str, logger: Optional[logging.Logger] = None) -> Dict[str, str]:
    """Read a UTF-8 caption file and return a mapping of item key -> caption text.

    Args:
        path: caption file with one `<key>: <caption text>` entry per line.
        logger: optional logger for informational messages.

    Returns:
        Dict of captions in file order. A key that appears more than once keeps
        the text of its last occurrence.

    Raises:
        CaptionFileError: the file is missing or unreadable.
        CaptionEncodingError: the file is not valid UTF-8.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    try:
        # utf-8-sig drops a leading byte-order mark written by some editors
        with open(path, "r", encoding="utf-8-sig") as f:
            content = f.read()
    except UnicodeDecodeError as exc:
        raise CaptionEncodingError(f"Caption file {path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise CaptionFileError(f"Cannot read caption file {path}: {exc}") from exc

    entries = parse_caption_lines(content.splitlines())
    find_duplicate_keys(entries, logger=logger)

    captions: Dict[str, str] = {}
    for key, text in entries:
        captions[key] = text
    logger.debug("Loaded %d caption(s) from %s", len(captions), path)
    return captions
