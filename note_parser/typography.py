"""
Thumbnail title typography.

Fits an article title onto the thumbnail overlay: truncates long titles,
wraps at a natural break near the middle and picks a font size from the
longest resulting line. The category only drives colors in the URL
builder, so it does not change the layout.
"""

from typing import Optional

from .schemas import TitleLayout

MAX_TITLE_LENGTH = 24
LINE_BREAK_AT = 12
# How far back from LINE_BREAK_AT to look for a break character
BREAK_SEARCH_WINDOW = 5
ELLIPSIS = "..."

# Japanese punctuation and one-character particles that read well at a line end
BREAK_CHARS = frozenset("、。！？のをにでがはと")

# (max line length, font size); anything longer gets SMALLEST_FONT_SIZE
FONT_SIZE_STEPS = (
    (8, 100),
    (10, 90),
    (12, 80),
)
SMALLEST_FONT_SIZE = 70


def find_break_point(text: str, max_length: int = LINE_BREAK_AT) -> int:
    """
    Index to break text at, or -1 when it already fits on one line.

    Scans backwards from max_length for a break character and breaks right
    after it; without one the break falls at max_length.
    """
    if len(text) <= max_length:
        return -1

    stop = max(max_length - BREAK_SEARCH_WINDOW, 1)
    for i in range(max_length, stop - 1, -1):
        if text[i] in BREAK_CHARS:
            return i + 1
    return max_length


def format_title(title: str) -> str:
    """Truncate and wrap a title for the overlay (at most one newline)."""
    if len(title) > MAX_TITLE_LENGTH:
        title = title[:MAX_TITLE_LENGTH - len(ELLIPSIS)] + ELLIPSIS

    if len(title) > LINE_BREAK_AT:
        at = find_break_point(title, LINE_BREAK_AT)
        if at > 0:
            title = f"{title[:at]}\n{title[at:]}"

    return title


def font_size_for(text: str) -> int:
    longest = max(len(line) for line in text.split("\n"))
    for max_length, size in FONT_SIZE_STEPS:
        if longest <= max_length:
            return size
    return SMALLEST_FONT_SIZE


def layout_title(title: str, category: Optional[str] = None) -> TitleLayout:
    """Compute the overlay text and font size for a thumbnail title."""
    display_text = format_title(title)
    return TitleLayout(display_text=display_text, font_size=font_size_for(display_text))
