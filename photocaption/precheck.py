"""Pre-check utilities for caption files.

This module runs before the caption mapping is built. It reports keys that
appear more than once so the user knows which captions were overwritten by
a later line.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
import logging

import pandas as pd


def find_duplicate_keys(
    entries: Sequence[Tuple[str, str]],
    logger: Optional[logging.Logger] = None,
) -> List[str]:
    """Report duplicate keys among parsed caption entries.

    The last occurrence of a key is the one that ends up in the caption
    mapping; every earlier occurrence is logged as overwritten.

    Args:
        entries: (key, text) pairs in file order.
        logger: Optional logger for informational messages.

    Returns:
        The duplicated keys, in order of first appearance.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    if not entries:
        return []

    df = pd.DataFrame(list(entries), columns=["key", "text"])
    overwritten = df[df.duplicated(subset=["key"], keep="last")]
    if overwritten.empty:
        return []

    for row in overwritten.itertuples(index=False):
        logger.warning("Duplicate caption key %s: text %r is overwritten by a later line", row.key, row.text)

    duplicated_keys = overwritten["key"].drop_duplicates().tolist()
    logger.info("Pre-check: %d key(s) appear more than once; the last caption wins", len(duplicated_keys))
    return duplicated_keys
