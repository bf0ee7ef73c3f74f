"""
Main orchestrator for importing a note article.

Wires the stages together for one page:
  page HTML → Extractor (body blocks, with fallback) → tagger (tags)
  and assembles the pending-review ArticleDraft. Projection to the CMS
  rich-text tree and the thumbnail title layout run on a finished draft.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from bs4 import BeautifulSoup

from .config import (
    CATEGORIES,
    CATEGORY_KEYWORDS,
    NEEDS_SETUP_PREFIX,
    REVIEW_GUIDANCE,
    ExtractorSettings,
    load_settings,
)
from .exceptions import UnknownCategoryError
from .extractor import Extractor
from .page import extract_description, extract_title, load_document, load_file, temp_slug
from .rich_text import blocks_to_document
from .schemas import (
    ArticleDraft,
    BlockKind,
    CategoryConfig,
    DraftMeta,
    ReviewGuidance,
    RichTextDocument,
    TitleLayout,
)
from .tagger import tags_for
from .typography import layout_title
from .logger import get_module_logger, setup_logger

logger = get_module_logger("main")

EXCERPT_SOURCE_LENGTH = 200
DESCRIPTION_SOURCE_LENGTH = 120
OGP_TEXT_LENGTH = 80
NEEDS_REVIEW_FIELDS = ["slug", "excerpt", "metaDescription", "tags"]


class NoteParser:
    """
    Builds article drafts from note pages.

    The category and keyword tables default to note_parser.config and can be
    replaced per instance.
    """

    def __init__(
        self,
        settings: Optional[ExtractorSettings] = None,
        categories: Mapping[str, CategoryConfig] = CATEGORIES,
        keywords: Mapping[str, Sequence[str]] = CATEGORY_KEYWORDS,
        log_level: int = None
    ):
        if log_level is not None:
            setup_logger(level=log_level)

        self.settings = settings or load_settings()
        self.categories = categories
        self.keywords = keywords
        self.extractor = Extractor(self.settings)

    def _category(self, category: str) -> CategoryConfig:
        config = self.categories.get(category)
        if config is None:
            raise UnknownCategoryError(category, known=list(self.categories))
        return config

    def parse(
        self,
        html: str,
        source_url: str,
        category: str,
        fetched_at: Optional[datetime] = None
    ) -> ArticleDraft:
        """
        Build a draft from page HTML.

        Args:
            html: Page HTML
            source_url: URL the page was fetched from
            category: Category id (key of the category table)
            fetched_at: Fetch time (default: now, UTC)

        Returns:
            ArticleDraft with placeholder slug/excerpt/description for review
        """
        self._category(category)
        soup = load_document(html, self.settings.tree_builder)
        return self.parse_soup(soup, source_url, category, fetched_at)

    def parse_file(
        self,
        file_path: Union[str, Path],
        source_url: str,
        category: str,
        fetched_at: Optional[datetime] = None
    ) -> ArticleDraft:
        """Build a draft from a saved page, honoring its declared charset."""
        self._category(category)
        soup = load_file(file_path, self.settings.tree_builder)
        return self.parse_soup(soup, source_url, category, fetched_at)

    def parse_soup(
        self,
        soup: BeautifulSoup,
        source_url: str,
        category: str,
        fetched_at: Optional[datetime] = None
    ) -> ArticleDraft:
        config = self._category(category)
        fetched_at = fetched_at or datetime.now(timezone.utc)

        title = extract_title(soup)
        logger.info(f"Parsing article: {title}")

        result = self.extractor.extract_article_blocks(soup)
        blocks = result.blocks

        first_paragraph = next((b for b in blocks if b.kind is BlockKind.PARAGRAPH), None)
        raw_excerpt = first_paragraph.text[:EXCERPT_SOURCE_LENGTH] if first_paragraph else ""
        raw_description = extract_description(soup)

        tags = tags_for(blocks, category, self.keywords, self.categories)

        draft = ArticleDraft(
            title=title,
            slug=temp_slug(source_url, now_ms=int(fetched_at.timestamp() * 1000)),
            category=category,
            excerpt=f"{NEEDS_SETUP_PREFIX} {raw_excerpt}",
            body=blocks,
            meta_description=f"{NEEDS_SETUP_PREFIX} {raw_description[:DESCRIPTION_SOURCE_LENGTH]}",
            ogp_text=title[:OGP_TEXT_LENGTH],
            cta_type=config.default_cta,
            tags=tags,
            source_url=source_url,
            meta=DraftMeta(
                fetched_at=fetched_at.isoformat(),
                source="note",
                needs_review=list(NEEDS_REVIEW_FIELDS),
                review_guidance=ReviewGuidance(**REVIEW_GUIDANCE),
            ),
        )

        logger.info(f"Complete: {len(blocks)} blocks from {result.container}, tags: {', '.join(tags)}")
        return draft

    def to_rich_text(self, draft: ArticleDraft) -> RichTextDocument:
        """Project the draft body to the CMS rich-text document."""
        return blocks_to_document(draft.body)

    def thumbnail_layout(self, draft: ArticleDraft) -> TitleLayout:
        """Title overlay layout for the draft's thumbnail."""
        return layout_title(draft.title, draft.category)


def parse_html(html: str, source_url: str, category: str) -> ArticleDraft:
    """Convenience function to build a draft from page HTML."""
    return NoteParser().parse(html, source_url, category)
