"""
Pydantic schemas shared by every stage of the parser.

Block model (Segment, Link, Block): produced by the extractor, persisted as
the draft JSON, read by the tagger and the rich-text projector.
Rich-text nodes: the CMS document tree produced by the projector.
Draft records (ArticleDraft, DraftMeta): the pending-review JSON file.

Data flow:
  page HTML → segments/extractor → list[Block]
  list[Block] → tagger → tags
  list[Block] → rich_text → RichTextDocument → CMS
  title → typography → TitleLayout → thumbnail URL builder
"""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# --- Block model ---

class Link(BaseModel):
    """Hyperlink annotation carried by a segment."""
    model_config = ConfigDict(frozen=True)

    url: str = Field(min_length=1)
    title: Optional[str] = None     # Anchor title attribute; not projected to the CMS


class Segment(BaseModel):
    """A contiguous text run inside a paragraph, optionally linked."""
    model_config = ConfigDict(frozen=True)

    text: str
    link: Optional[Link] = None

    @property
    def has_link(self) -> bool:
        return self.link is not None


class BlockKind(str, Enum):
    """Semantic block kinds. Values are the persisted `type` field."""
    HEADING2 = "h2"
    HEADING3 = "h3"
    PARAGRAPH = "p"


class Block(BaseModel):
    """
    One semantic content unit in reading order.

    `text` is always the flattened plain text (used for tagging and search).
    `segments` is set only for paragraphs that contain at least one link;
    when unset the block renders as a single plain run of `text`.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: BlockKind = Field(alias="type")
    text: str
    segments: Optional[list[Segment]] = None

    @model_validator(mode="after")
    def _headings_carry_plain_text(self) -> "Block":
        if self.segments is not None and self.kind is not BlockKind.PARAGRAPH:
            raise ValueError(f"{self.kind.value} block cannot carry segments")
        return self

    @property
    def is_heading(self) -> bool:
        return self.kind in (BlockKind.HEADING2, BlockKind.HEADING3)

    def to_record(self) -> dict:
        """Plain JSON-ready dict in the draft file format."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ExtractionResult(BaseModel):
    """Blocks for one page plus which container produced them."""
    blocks: list[Block] = Field(default_factory=list)
    container: Literal["body", "fallback", "placeholder"] = "body"
    warnings: list[str] = Field(default_factory=list)  # Fallbacks that fired


# --- Rich-text document tree (CMS node schema) ---

class TextNode(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    node_type: Literal["text"] = Field(default="text", alias="nodeType")
    value: str
    marks: list[dict] = Field(default_factory=list)
    data: dict = Field(default_factory=dict)


class HyperlinkData(BaseModel):
    model_config = ConfigDict(frozen=True)

    uri: str


class HyperlinkNode(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    node_type: Literal["hyperlink"] = Field(default="hyperlink", alias="nodeType")
    data: HyperlinkData
    content: list[TextNode]


class HeadingNode(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    node_type: Literal["heading-2", "heading-3"] = Field(alias="nodeType")
    data: dict = Field(default_factory=dict)
    content: list[TextNode]


class ParagraphNode(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    node_type: Literal["paragraph"] = Field(default="paragraph", alias="nodeType")
    data: dict = Field(default_factory=dict)
    content: list[Union[TextNode, HyperlinkNode]]


class RichTextDocument(BaseModel):
    """Root of the CMS rich-text tree."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    node_type: Literal["document"] = Field(default="document", alias="nodeType")
    data: dict = Field(default_factory=dict)
    content: list[Union[HeadingNode, ParagraphNode]] = Field(default_factory=list)

    def to_cms(self) -> dict:
        """Dict in the CMS field format (camelCase node keys)."""
        return self.model_dump(by_alias=True, mode="json")


# --- Typography ---

class TitleLayout(BaseModel):
    """Wrapped thumbnail title and its font size class."""
    display_text: str       # May contain one "\n"
    font_size: int


# --- Configuration records ---

class CategoryConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    default_cta: str
    default_tags: tuple[str, ...]


# --- Draft article (pending-review JSON) ---

class ReviewGuidance(BaseModel):
    slug: str
    excerpt: str
    meta_description: str = Field(alias="metaDescription")
    tags: str

    model_config = ConfigDict(populate_by_name=True)


class DraftMeta(BaseModel):
    """Bookkeeping for the human/LLM review step."""
    model_config = ConfigDict(populate_by_name=True)

    fetched_at: str = Field(alias="fetchedAt")
    source: str = "note"
    needs_review: list[str] = Field(alias="needsReview")
    review_guidance: ReviewGuidance = Field(alias="reviewGuidance")


class ArticleDraft(BaseModel):
    """An imported article waiting for review before publishing."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    slug: str
    category: str
    excerpt: str
    body: list[Block]
    meta_description: str = Field(alias="metaDescription")
    ogp_text: Optional[str] = Field(default=None, alias="ogpText")
    cta_type: Optional[str] = Field(default=None, alias="ctaType")
    tags: list[str] = Field(default_factory=list)
    youtube_url: Optional[str] = Field(default=None, alias="youtubeUrl")
    source_url: Optional[str] = Field(default=None, alias="sourceUrl")
    meta: Optional[DraftMeta] = Field(default=None, alias="_meta")

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ValidationIssue(BaseModel):
    """One problem found in a draft."""
    field: str
    message: str
    severity: Literal["error", "warning"] = "error"
