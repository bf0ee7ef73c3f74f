"""Tests for the block classifier and its container fallback."""

import pytest
from bs4 import BeautifulSoup
from pydantic import ValidationError

from note_parser.config import PLACEHOLDER_BLOCKS, ExtractorSettings
from note_parser.extractor import Extractor, extract_blocks
from note_parser.schemas import Block, BlockKind, Link, Segment

BUILDERS = ["html5lib", "lxml"]


def container(markup: str, builder: str = "html5lib"):
    soup = BeautifulSoup(f'<div class="body">{markup}</div>', builder)
    return soup.select_one("div.body")


def paragraph(text, segments=None):
    return Block(kind=BlockKind.PARAGRAPH, text=text, segments=segments)


# ---------------------------------------------------------------------------
# Headings and paragraphs
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("builder", BUILDERS)
def test_headings_and_paragraphs(builder):
    body = container("<h2> 見出し </h2><h3>小見出し</h3><p>本文です。</p><h2>  </h2><p> </p>", builder)

    assert extract_blocks(body) == [
        Block(kind=BlockKind.HEADING2, text="見出し"),
        Block(kind=BlockKind.HEADING3, text="小見出し"),
        paragraph("本文です。"),
    ]


def test_heading_keeps_plain_text_even_with_link():
    body = container('<h2><a href="/x">リンク見出し</a></h2>')

    assert extract_blocks(body) == [Block(kind=BlockKind.HEADING2, text="リンク見出し")]


def test_paragraph_with_link_carries_segments():
    body = container('<p> 詳しくは<a href="https://note.com/x">こちら</a>へ </p>')

    [block] = extract_blocks(body)

    assert block.text == "詳しくはこちらへ"
    assert block.segments == [
        Segment(text=" 詳しくは"),
        Segment(text="こちら", link=Link(url="https://note.com/x")),
        Segment(text="へ "),
    ]


def test_paragraph_without_link_has_no_segments():
    [block] = extract_blocks(container("<p>plain <strong>bold</strong></p>"))

    assert block.text == "plain bold"
    assert block.segments is None


def test_unrecognized_tags_are_skipped_with_their_subtree():
    body = container("<section><p>hidden</p></section><blockquote><p>quote</p></blockquote>"
                     "<h4>h4</h4><p>kept</p>")

    assert extract_blocks(body) == [paragraph("kept")]


def test_text_directly_in_container_is_ignored():
    assert extract_blocks(container("loose text<p>kept</p>")) == [paragraph("kept")]


# ---------------------------------------------------------------------------
# Lists and figures
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("tag", ["ul", "ol"])
def test_list_items_become_bulleted_paragraphs(tag):
    body = container(f'<{tag}><li>one</li><li>see <a href="https://x.test">two</a></li><li> </li></{tag}>')

    first, second = extract_blocks(body)

    assert first == paragraph("・one")
    assert second.text == "・see two"
    assert second.segments == [
        Segment(text="・"),
        Segment(text="see "),
        Segment(text="two", link=Link(url="https://x.test")),
    ]


def test_figure_caption_is_wrapped_in_parentheses():
    body = container('<figure><img src="a.png"><figcaption> 写真の説明 </figcaption></figure>'
                     '<figure><img src="b.png"></figure>')

    assert extract_blocks(body) == [paragraph("（写真の説明）")]


# ---------------------------------------------------------------------------
# Link cards and wrapper divs
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("markup", [
    '<div><a href="https://note.com/card">Card</a></div>',
    '<div><div><span><a href="https://note.com/card">Card</a></span></div></div>',
    '<div><div><div><strong><a href="https://note.com/card"> Card </a></strong></div></div></div>',
])
def test_single_anchor_wrapper_is_one_link_card(markup):
    assert extract_blocks(container(markup)) == [
        paragraph("Card", [Segment(text="Card", link=Link(url="https://note.com/card"))]),
    ]


def test_link_card_without_anchor_text_uses_href():
    body = container('<div><a href="https://x.test/a"><img src="ogp.png"></a></div>')

    assert extract_blocks(body) == [
        paragraph("https://x.test/a", [Segment(text="https://x.test/a", link=Link(url="https://x.test/a"))]),
    ]


def test_link_card_uses_first_anchor_and_keeps_title():
    body = container('<div class="note-embed"><p>preview</p>'
                     '<a href="/1" title="First">first</a><a href="/2">second</a></div>')

    [block] = extract_blocks(body)

    assert block.segments == [Segment(text="first", link=Link(url="/1", title="First"))]


def test_iframe_without_anchor_falls_back_to_content_search():
    body = container('<div><iframe src="https://www.youtube.com/embed/x"></iframe><p>動画の紹介</p></div>')

    assert extract_blocks(body) == [paragraph("動画の紹介")]


def test_wrapper_div_flattens_nested_content_in_order():
    body = container('<div><div><h2>H</h2><p>para <a href="/l">link</a></p></div>'
                     '<section><h3>sub</h3></section><p>tail</p></div>')

    assert extract_blocks(body) == [
        Block(kind=BlockKind.HEADING2, text="H"),
        paragraph("para link", [Segment(text="para "), Segment(text="link", link=Link(url="/l"))]),
        Block(kind=BlockKind.HEADING3, text="sub"),
        paragraph("tail"),
    ]


def test_wrapper_div_with_anchor_but_two_children_yields_nothing():
    body = container('<div><span>label</span><a href="/l">x</a></div>')

    assert extract_blocks(body) == []


@pytest.mark.parametrize("markup,reason", [
    ('<div class="note-embed"><p>x</p></div>', "embed-class"),
    ('<div><figure class="note-embed"><a href="/u">E</a></figure><p>caption</p></div>', "embed-descendant"),
    ('<div><p>x</p><iframe src="/v"></iframe></div>', "iframe"),
    ('<div><span><a href="/u">x</a></span></div>', "single-child"),
    ('<div><p><a href="/u">x</a></p></div>', None),
    ('<div><span>a</span><span><a href="/u">x</a></span></div>', None),
    ('<div><span>no link</span></div>', None),
    ('<div><span><a>no href</a></span></div>', None),
])
def test_link_card_reason(markup, reason):
    div = container(markup).find("div")

    assert Extractor().link_card_reason(div) == reason
    assert Extractor().is_link_card(div) is (reason is not None)


def test_embed_class_is_configurable():
    extractor = Extractor(ExtractorSettings(embed_class="embed-card"))
    body = container('<div class="embed-card"><p>preview</p><a href="/u">U</a></div>')

    assert [b.text for b in extractor.extract(body)] == ["U"]


# ---------------------------------------------------------------------------
# Page-level fallback policy
# ---------------------------------------------------------------------------


def page(markup: str):
    return BeautifulSoup(f"<html><body>{markup}</body></html>", "html5lib")


def test_body_container_is_used_first():
    soup = page('<div class="note-common-styles__textnote-body"><h2>A</h2></div>'
                "<article><p>B</p></article>")

    result = Extractor().extract_article_blocks(soup)

    assert result.container == "body"
    assert result.blocks == [Block(kind=BlockKind.HEADING2, text="A")]
    assert result.warnings == []


@pytest.mark.parametrize("primary", [
    '<div class="note-common-styles__textnote-body"><section>x</section></div>',
    "",
])
def test_fallback_container_when_body_is_empty_or_missing(primary):
    soup = page(primary + "<article><p>B</p></article>")

    result = Extractor().extract_article_blocks(soup)

    assert result.container == "fallback"
    assert result.blocks == [paragraph("B")]
    assert len(result.warnings) == 1


def test_placeholder_when_nothing_is_found():
    result = Extractor().extract_article_blocks(page("<main><p>elsewhere</p></main>"))

    assert result.container == "placeholder"
    assert result.blocks == list(PLACEHOLDER_BLOCKS)
    assert [b.kind for b in result.blocks] == [BlockKind.HEADING2, BlockKind.PARAGRAPH]


# ---------------------------------------------------------------------------
# Block model invariants
# ---------------------------------------------------------------------------


def test_heading_with_segments_is_rejected():
    with pytest.raises(ValidationError):
        Block(kind=BlockKind.HEADING2, text="x", segments=[Segment(text="x")])


def test_link_requires_url():
    with pytest.raises(ValidationError):
        Link(url="")


def test_block_record_uses_type_key_and_omits_unset_fields():
    block = paragraph("a", [Segment(text="a", link=Link(url="/a"))])

    assert block.to_record() == {
        "type": "p",
        "text": "a",
        "segments": [{"text": "a", "link": {"url": "/a"}}],
    }
    assert Block.model_validate({"type": "h3", "text": "t"}).kind is BlockKind.HEADING3
