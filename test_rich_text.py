"""Tests for projecting blocks onto the CMS rich-text tree."""

import pytest
from bs4 import BeautifulSoup

from note_parser.exceptions import BlockInvariantError
from note_parser.extractor import extract_blocks
from note_parser.rich_text import blocks_to_document, blocks_to_rich_text
from note_parser.schemas import Block, BlockKind, HyperlinkNode, Link, Segment, TextNode


def text_node(value):
    return {"nodeType": "text", "value": value, "marks": [], "data": {}}


BLOCKS = [
    Block(kind=BlockKind.HEADING2, text="はじめに"),
    Block(kind=BlockKind.HEADING3, text="背景"),
    Block(kind=BlockKind.PARAGRAPH, text="本文"),
    Block(kind=BlockKind.PARAGRAPH, text="詳しくはこちら", segments=[
        Segment(text="詳しくは"),
        Segment(text="こちら", link=Link(url="https://note.com/x", title="note")),
    ]),
]


def test_document_matches_cms_schema():
    assert blocks_to_rich_text(BLOCKS) == {
        "nodeType": "document",
        "data": {},
        "content": [
            {"nodeType": "heading-2", "data": {}, "content": [text_node("はじめに")]},
            {"nodeType": "heading-3", "data": {}, "content": [text_node("背景")]},
            {"nodeType": "paragraph", "data": {}, "content": [text_node("本文")]},
            {"nodeType": "paragraph", "data": {}, "content": [
                text_node("詳しくは"),
                {
                    "nodeType": "hyperlink",
                    "data": {"uri": "https://note.com/x"},
                    "content": [text_node("こちら")],
                },
            ]},
        ],
    }


def test_projection_is_repeatable():
    assert blocks_to_document(BLOCKS) == blocks_to_document(BLOCKS)
    assert blocks_to_rich_text(BLOCKS) == blocks_to_rich_text(BLOCKS)


def test_empty_block_list_gives_empty_document():
    assert blocks_to_rich_text([]) == {"nodeType": "document", "data": {}, "content": []}


def test_plain_paragraph_keeps_text_exactly():
    block = Block(kind=BlockKind.PARAGRAPH, text="  spaced  text ")

    [node] = blocks_to_document([block]).content

    assert node.content == [TextNode(value="  spaced  text ")]


def test_empty_segment_list_renders_text():
    block = Block(kind=BlockKind.PARAGRAPH, text="t", segments=[])

    [node] = blocks_to_document([block]).content

    assert node.content == [TextNode(value="t")]


def test_links_keep_url_and_text():
    html = ('<div class="body"><p>Hello <a href="https://x.test">world</a>!</p>'
            '<ul><li><a href="/a">A</a> and <a href="/b">B</a></li></ul></div>')
    blocks = extract_blocks(BeautifulSoup(html, "html5lib").select_one("div.body"))

    document = blocks_to_document(blocks)

    for block, node in zip(blocks, document.content):
        links = [s for s in block.segments if s.link]
        hyperlinks = [n for n in node.content if isinstance(n, HyperlinkNode)]
        assert [h.data.uri for h in hyperlinks] == [s.link.url for s in links]
        assert [h.content[0].value for h in hyperlinks] == [s.text for s in links]

    first = document.content[0]
    assert "".join(n.value if isinstance(n, TextNode) else n.content[0].value
                   for n in first.content) == blocks[0].text


def test_heading_with_segments_is_rejected():
    bad = Block.model_construct(kind=BlockKind.HEADING2, text="x", segments=[Segment(text="x")])

    with pytest.raises(BlockInvariantError) as exc_info:
        blocks_to_document([BLOCKS[0], bad])

    assert exc_info.value.index == 1


def test_linked_segment_without_url_is_rejected():
    segment = Segment.model_construct(text="x", link=Link.model_construct(url="", title=None))
    block = Block.model_construct(kind=BlockKind.PARAGRAPH, text="x", segments=[segment])

    with pytest.raises(BlockInvariantError):
        blocks_to_document([block])
