"""
Segment extractor.

Walks an element's children in document order and produces text/link
segments. Inline wrappers (span, strong, em, ...) are flattened by
recursion; an anchor is never recursed into and becomes one linked segment.

Input:  a bs4 Tag
Output: list[Segment] in reading order (empty when there is no text)
"""

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

from .schemas import Link, Segment

# Anchor tag: collapsed into a single linked segment
LINK_TAG = "a"


def is_text_node(node) -> bool:
    """True for character data; comments, CDATA and doctypes are skipped."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def anchor_segment(anchor: Tag):
    """
    Build the linked segment for an anchor, or None when the anchor has no
    visible text or no href.
    """
    text = anchor.get_text().strip()
    href = anchor.get("href")
    if not text or not href:
        return None
    return Segment(text=text, link=Link(url=href, title=anchor.get("title")))


def extract_segments(elem: Tag) -> list[Segment]:
    """Extract the ordered text/link segments under elem."""
    segments = []

    for child in elem.children:
        if is_text_node(child):
            # Whitespace-only runs between tags are dropped; other runs keep
            # their surrounding spaces so the segments read naturally
            if str(child).strip():
                segments.append(Segment(text=str(child)))
        elif isinstance(child, Tag):
            if child.name == LINK_TAG:
                segment = anchor_segment(child)
                if segment is not None:
                    segments.append(segment)
            else:
                segments.extend(extract_segments(child))

    return segments


def has_links(segments: list[Segment]) -> bool:
    """Check whether any segment carries a link."""
    return any(segment.has_link for segment in segments)
