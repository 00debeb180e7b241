"""
=============================================================================
CONTENT TYPE CLASSIFICATION
=============================================================================

Maps a request path to the MIME type the response is sent with.

The server only knows how to deliver two kinds of content:

    text/html   lines of text, with tag substitution
    image/*     raw bytes, copied verbatim

so the table is deliberately tiny. Anything it does not list, including a
path with no extension at all, is treated as HTML.

    ┌──────────────────┬──────────────────┐
    │ Suffix           │ Content type     │
    ├──────────────────┼──────────────────┤
    │ .jpg, .jpeg      │ image/jpeg       │
    │ .png             │ image/png        │
    │ .gif             │ image/gif        │
    │ .ico             │ image/x-icon     │
    │ anything else    │ text/html        │
    └──────────────────┴──────────────────┘

Matching is case-insensitive: /PHOTO.JPG is image/jpeg.

=============================================================================
"""

from enum import Enum


class ContentType(str, Enum):
    """The content types the server can send."""

    HTML = "text/html"
    JPEG = "image/jpeg"
    PNG = "image/png"
    GIF = "image/gif"
    ICON = "image/x-icon"

    @property
    def is_image(self) -> bool:
        """Images are sent as raw bytes; everything else as text lines."""
        return self.value.startswith("image/")

    def __str__(self) -> str:
        return self.value


# Checked in order; first matching suffix wins
SUFFIX_TABLE = (
    (".jpg", ContentType.JPEG),
    (".jpeg", ContentType.JPEG),
    (".png", ContentType.PNG),
    (".gif", ContentType.GIF),
    (".ico", ContentType.ICON),
)

DEFAULT_CONTENT_TYPE = ContentType.HTML


def classify(path: str) -> ContentType:
    """
    Get the content type for a request path from its suffix.

    Examples:
        >>> classify("/images/cat.PNG")
        <ContentType.PNG: 'image/png'>

        >>> classify("/README")
        <ContentType.HTML: 'text/html'>
    """
    lowered = path.lower()
    for suffix, content_type in SUFFIX_TABLE:
        if lowered.endswith(suffix):
            return content_type
    return DEFAULT_CONTENT_TYPE
