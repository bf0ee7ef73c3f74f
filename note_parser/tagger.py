"""
Keyword tagger: suggests tags by scanning block text for category keywords.
"""

from typing import Mapping, Optional, Sequence

from .config import CATEGORIES, CATEGORY_KEYWORDS
from .schemas import Block, CategoryConfig
from .logger import get_module_logger

logger = get_module_logger("tagger")

MAX_TAGS = 5


def suggest_tags(
    blocks: Sequence[Block],
    category: str,
    keywords: Mapping[str, Sequence[str]] = CATEGORY_KEYWORDS,
    limit: int = MAX_TAGS
) -> list[str]:
    """
    Return up to `limit` keywords of the category found in the blocks.

    Matching is plain case-sensitive substring containment against all block
    texts joined with single spaces. Results keep the keyword list's order.
    An unknown category has no keywords and yields [].
    """
    buffer = " ".join(block.text for block in blocks)
    found = [kw for kw in keywords.get(category, ()) if kw in buffer]
    return found[:limit]


def tags_for(
    blocks: Sequence[Block],
    category: str,
    keywords: Mapping[str, Sequence[str]] = CATEGORY_KEYWORDS,
    categories: Mapping[str, CategoryConfig] = CATEGORIES,
    limit: int = MAX_TAGS
) -> list[str]:
    """Suggested tags, or the category's default tags when none match."""
    tags = suggest_tags(blocks, category, keywords, limit)
    if tags:
        return tags

    config: Optional[CategoryConfig] = categories.get(category)
    logger.info(f"No keyword matches for '{category}', using default tags")
    return list(config.default_tags) if config else []
