"""
Block classifier.

Turns the direct children of an article body container into an ordered
list of Blocks. Recognized tags are dispatched to one handler each;
anything else is skipped without scanning its subtree.

Pipeline position: after page parsing, before tagging and projection.
Input:  bs4 Tag (the body container) or a whole parsed page
Output: list[Block] / ExtractionResult
"""

from typing import Optional

from bs4 import BeautifulSoup, Tag

from .config import PLACEHOLDER_BLOCKS, ExtractorSettings
from .schemas import Block, BlockKind, ExtractionResult, Link, Segment
from .segments import extract_segments, has_links
from .logger import get_module_logger

logger = get_module_logger("extractor")

HEADING_KINDS = {
    "h2": BlockKind.HEADING2,
    "h3": BlockKind.HEADING3,
}

# Tags searched for inside a wrapper div that is not a link card
CONTENT_TAGS = ["h2", "h3", "p"]

LIST_BULLET = "・"
CAPTION_OPEN = "（"
CAPTION_CLOSE = "）"


class Extractor:
    """Classifies article body markup into Blocks."""

    def __init__(self, settings: Optional[ExtractorSettings] = None):
        self.settings = settings or ExtractorSettings()
        self._handlers = {
            "h2": self._heading_blocks,
            "h3": self._heading_blocks,
            "p": self._paragraph_blocks,
            "div": self._div_blocks,
            "ul": self._list_blocks,
            "ol": self._list_blocks,
            "figure": self._figure_blocks,
        }

    def extract(self, container: Tag) -> list[Block]:
        """
        Classify the direct children of container into Blocks.

        Never raises for sparse markup: a container without recognizable
        content yields an empty list.
        """
        blocks = []
        for child in container.children:
            if not isinstance(child, Tag):
                continue
            handler = self._handlers.get(child.name)
            if handler is None:
                continue  # Unrecognized tag, subtree not scanned
            blocks.extend(handler(child))
        return blocks

    def extract_article_blocks(self, soup: BeautifulSoup) -> ExtractionResult:
        """
        Extract the article body of a parsed page with the fallback policy.

        Tries the body container, then the fallback container, and finally
        substitutes the placeholder heading/paragraph pair.
        """
        warnings = []

        body = soup.select_one(self.settings.body_selector)
        if body is None:
            warnings.append(f"Body container not found: {self.settings.body_selector}")
            logger.warning(f"Body container not found ({self.settings.body_selector}), trying fallback")
            blocks = []
        else:
            blocks = self.extract(body)
            if not blocks:
                warnings.append("Body container yielded no blocks")
                logger.warning("Body container yielded no blocks, trying fallback")

        if blocks:
            logger.info(f"Extracted {len(blocks)} blocks from body container")
            return ExtractionResult(blocks=blocks, container="body", warnings=warnings)

        fallback = soup.select_one(self.settings.fallback_selector)
        if fallback is not None:
            blocks = self.extract(fallback)

        if blocks:
            logger.info(f"Extracted {len(blocks)} blocks from fallback container")
            return ExtractionResult(blocks=blocks, container="fallback", warnings=warnings)

        warnings.append("No content extracted, using placeholder blocks")
        logger.warning("No content extracted, substituting placeholder blocks")
        return ExtractionResult(blocks=list(PLACEHOLDER_BLOCKS), container="placeholder",
                                warnings=warnings)

    # --- Tag handlers ---

    def _heading_blocks(self, elem: Tag) -> list[Block]:
        text = elem.get_text().strip()
        if not text:
            return []
        return [Block(kind=HEADING_KINDS[elem.name], text=text)]

    def _paragraph_blocks(self, elem: Tag) -> list[Block]:
        # text is the element's own text, never rebuilt from the segments
        text = elem.get_text().strip()
        if not text:
            return []
        segments = extract_segments(elem)
        return [Block(kind=BlockKind.PARAGRAPH, text=text,
                      segments=segments if has_links(segments) else None)]

    def _div_blocks(self, elem: Tag) -> list[Block]:
        anchor = elem.find("a", href=True)
        if anchor is not None and self.link_card_reason(elem) is not None:
            return self._link_card_blocks(anchor)

        # Plain wrapper: flatten every heading/paragraph in the subtree
        blocks = []
        for inner in elem.find_all(CONTENT_TAGS):
            if inner.name == "p":
                blocks.extend(self._paragraph_blocks(inner))
            else:
                blocks.extend(self._heading_blocks(inner))
        return blocks

    def _link_card_blocks(self, anchor: Tag) -> list[Block]:
        href = anchor.get("href")
        if not href:
            return []
        text = anchor.get_text().strip() or href
        return [Block(
            kind=BlockKind.PARAGRAPH,
            text=text,
            segments=[Segment(text=text, link=Link(url=href, title=anchor.get("title")))],
        )]

    def _list_blocks(self, elem: Tag) -> list[Block]:
        blocks = []
        for item in elem.find_all("li"):
            text = item.get_text().strip()
            if not text:
                continue
            segments = extract_segments(item)
            # The linked variant keeps the bullet as its own segment while
            # the plain variant prefixes it to the text
            # TODO: settle whether linked items should prefix the bullet to
            # the first segment like plain items do
            blocks.append(Block(
                kind=BlockKind.PARAGRAPH,
                text=LIST_BULLET + text,
                segments=[Segment(text=LIST_BULLET)] + segments if has_links(segments) else None,
            ))
        return blocks

    def _figure_blocks(self, elem: Tag) -> list[Block]:
        caption = "".join(fc.get_text() for fc in elem.find_all("figcaption")).strip()
        if not caption:
            return []
        return [Block(kind=BlockKind.PARAGRAPH, text=CAPTION_OPEN + caption + CAPTION_CLOSE)]

    # --- Link card heuristic ---

    def link_card_reason(self, elem: Tag) -> Optional[str]:
        """
        Name the first link-card rule that elem matches, or None.

        Rules in priority order:
          embed-class       elem itself has the embed class
          embed-descendant  a descendant has the embed class
          iframe            elem contains an iframe
          single-child      exactly one child element, at least one anchor
                            with href, and no h2/h3/p anywhere inside
        """
        embed_class = self.settings.embed_class
        if embed_class in (elem.get("class") or []):
            return "embed-class"
        if elem.find(class_=embed_class) is not None:
            return "embed-descendant"
        if elem.find("iframe") is not None:
            return "iframe"
        child_elements = [c for c in elem.children if isinstance(c, Tag)]
        if (len(child_elements) == 1
                and elem.find("a", href=True) is not None
                and elem.find(CONTENT_TAGS) is None):
            return "single-child"
        return None

    def is_link_card(self, elem: Tag) -> bool:
        return self.link_card_reason(elem) is not None


def extract_blocks(container: Tag, settings: Optional[ExtractorSettings] = None) -> list[Block]:
    """Convenience function to classify one container."""
    return Extractor(settings).extract(container)
