"""
note article parser

Turns a note article page into a portable block model and projects that
model to a CMS rich-text document.
- Segment extractor: text/link runs inside a paragraph
- Extractor: body markup → ordered Blocks (with container fallback)
- Tagger: keyword tag suggestions per category
- Rich text: Blocks → CMS document tree
- Typography: thumbnail title wrapping and font size

Public API surface:
  Pipeline      — NoteParser, Extractor, extract_segments
  Projections   — blocks_to_document, suggest_tags, layout_title
  Data models   — Block, BlockKind, Segment, Link, ArticleDraft, RichTextDocument, TitleLayout
  Validation    — validate_article, review_issues, ensure_publishable
  Error types   — NoteParserError, BlockInvariantError, UnknownCategoryError, ArticleValidationError
"""

# --- Pipeline stages ---
from .segments import extract_segments
from .extractor import Extractor
from .tagger import suggest_tags, tags_for
from .rich_text import blocks_to_document, blocks_to_rich_text
from .typography import layout_title
from .main import NoteParser

# --- Data models ---
from .schemas import (
    ArticleDraft,
    Block,
    BlockKind,
    ExtractionResult,
    Link,
    RichTextDocument,
    Segment,
    TitleLayout,
)

# --- Validation ---
from .validator import ensure_publishable, review_issues, validate_article

# --- Exceptions ---
from .exceptions import (
    ArticleValidationError,
    BlockInvariantError,
    NoteParserError,
    UnknownCategoryError,
)

__version__ = "0.1.0"
__all__ = [
    "extract_segments",
    "Extractor",
    "suggest_tags",
    "tags_for",
    "blocks_to_document",
    "blocks_to_rich_text",
    "layout_title",
    "NoteParser",
    "ArticleDraft",
    "Block",
    "BlockKind",
    "ExtractionResult",
    "Link",
    "RichTextDocument",
    "Segment",
    "TitleLayout",
    "ensure_publishable",
    "review_issues",
    "validate_article",
    "ArticleValidationError",
    "BlockInvariantError",
    "NoteParserError",
    "UnknownCategoryError",
]
