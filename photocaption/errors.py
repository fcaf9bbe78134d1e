"""Exceptions raised while loading captions and composing pages."""
from typing import Optional


class CaptionPagesError(Exception):
    pass


class CaptionFileError(CaptionPagesError, OSError):
    """The caption file is missing or cannot be read. Fatal for the whole run."""


class CaptionEncodingError(CaptionPagesError, ValueError):
    """The caption file is not valid UTF-8. Fatal for the whole run."""


class ItemError(CaptionPagesError):
    """A failure confined to one captioned photo."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key

    def __str__(self):
        message = super().__str__()
        if self.key is None:
            return message
        return f"[{self.key}] {message}"


class PhotoNotFoundError(ItemError, OSError):
    pass


class PhotoDecodeError(ItemError):
    pass


class PageEncodeError(ItemError):
    pass


class CaptionOverflowError(ItemError):
    """The caption block leaves no room for the photo on the canvas."""
