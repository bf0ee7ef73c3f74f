"""
Rich-text projector.

Maps a Block sequence onto the CMS rich-text document tree. The mapping is
pure: the same blocks always give an equal document.

  h2 / h3 block          → heading-2 / heading-3 with one text node
  p block, no segments   → paragraph with one text node
  p block with segments  → paragraph with one text or hyperlink node per
                           segment (link titles are not projected)
"""

from typing import Sequence

from .exceptions import BlockInvariantError
from .schemas import (
    Block,
    BlockKind,
    HeadingNode,
    HyperlinkData,
    HyperlinkNode,
    ParagraphNode,
    RichTextDocument,
    Segment,
    TextNode,
)

HEADING_NODE_TYPES = {
    BlockKind.HEADING2: "heading-2",
    BlockKind.HEADING3: "heading-3",
}


def segment_to_node(segment: Segment):
    if segment.link is None:
        return TextNode(value=segment.text)
    if not segment.link.url:
        raise BlockInvariantError("Linked segment has an empty url",
                                  details={"text": segment.text})
    return HyperlinkNode(
        data=HyperlinkData(uri=segment.link.url),
        content=[TextNode(value=segment.text)],
    )


def block_to_node(block: Block):
    if block.is_heading:
        # Blocks built with model_construct skip validation, so check again
        if block.segments is not None:
            raise BlockInvariantError(f"{block.kind.value} block carries segments")
        return HeadingNode(node_type=HEADING_NODE_TYPES[block.kind],
                           content=[TextNode(value=block.text)])

    if block.segments:
        return ParagraphNode(content=[segment_to_node(s) for s in block.segments])
    return ParagraphNode(content=[TextNode(value=block.text)])


def blocks_to_document(blocks: Sequence[Block]) -> RichTextDocument:
    """Project blocks to a rich-text document, preserving order."""
    content = []
    for index, block in enumerate(blocks):
        try:
            content.append(block_to_node(block))
        except BlockInvariantError as e:
            e.index = index
            raise
    return RichTextDocument(content=content)


def blocks_to_rich_text(blocks: Sequence[Block]) -> dict:
    """Project blocks straight to the CMS field dict."""
    return blocks_to_document(blocks).to_cms()
