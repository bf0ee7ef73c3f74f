"""
Draft validation.

validate_article checks the structure of a draft record (as stored in the
pending JSON file); review_issues checks that the reviewer replaced every
placeholder; ensure_publishable combines both and fails hard on errors.
"""

import re
from typing import Mapping, Union

from .config import (
    ARTICLE_DEFAULTS,
    CATEGORIES,
    CTA_TYPES,
    NEEDS_SETUP_PREFIX,
    TEMP_SLUG_PREFIX,
)
from .exceptions import ArticleValidationError
from .schemas import ArticleDraft, BlockKind, ValidationIssue
from .logger import get_module_logger

logger = get_module_logger("validator")

REQUIRED_FIELDS = ["title", "slug", "category", "excerpt", "body", "metaDescription"]
TEXT_FIELDS = ["title", "slug", "category", "excerpt", "metaDescription", "ctaType", "youtubeUrl"]
SLUG_PATTERN = re.compile(r'^[a-z0-9-]+$')
BLOCK_TYPES = {kind.value for kind in BlockKind}
YOUTUBE_HOSTS = ("youtube.com", "youtu.be")


def _as_record(data: Union[ArticleDraft, Mapping]) -> Mapping:
    if isinstance(data, ArticleDraft):
        return data.to_record()
    return data


def _error(field: str, message: str) -> ValidationIssue:
    return ValidationIssue(field=field, message=message, severity="error")


def _warning(field: str, message: str) -> ValidationIssue:
    return ValidationIssue(field=field, message=message, severity="warning")


def _text(article: Mapping, field: str) -> str:
    """Field value if it is a string, else an empty string."""
    value = article.get(field)
    return value if isinstance(value, str) else ""


def _type_errors(article: Mapping) -> list[ValidationIssue]:
    issues = []
    for field in TEXT_FIELDS:
        value = article.get(field)
        if value is not None and not isinstance(value, str):
            issues.append(_error(field, f"{field} must be a string, got {type(value).__name__}"))
    return issues


def _validate_body(body) -> list[ValidationIssue]:
    if not isinstance(body, list):
        return [_error("body", "body must be a list")]
    if not body:
        return [_error("body", "body is empty")]

    issues = []
    first = body[0] if isinstance(body[0], Mapping) else {}
    if first.get("type") != BlockKind.HEADING2.value:
        issues.append(_warning("body", "body should start with an h2 heading"))

    for index, block in enumerate(body):
        if not isinstance(block, Mapping):
            issues.append(_error(f"body[{index}]", "block must be an object"))
            continue
        block_type = block.get("type")
        if not isinstance(block_type, str) or block_type not in BLOCK_TYPES:
            issues.append(_error(f"body[{index}].type", f"invalid type: {block_type!r}"))
        text = block.get("text")
        if not isinstance(text, str) or not text.strip():
            issues.append(_warning(f"body[{index}].text", "text is empty"))
    return issues


def validate_article(
    data: Union[ArticleDraft, Mapping],
    categories: Mapping = CATEGORIES,
    cta_types: Mapping = CTA_TYPES
) -> list[ValidationIssue]:
    """Structural checks on a draft record."""
    article = _as_record(data)
    issues = []

    for field in REQUIRED_FIELDS:
        if article.get(field) is None:
            issues.append(_error(field, "required field is missing"))
    issues.extend(_type_errors(article))

    title = article.get("title")
    if isinstance(title, str):
        max_length = ARTICLE_DEFAULTS["title_max_length"]
        if not title:
            issues.append(_error("title", "title is empty"))
        elif len(title) > max_length:
            issues.append(_error("title", f"title exceeds {max_length} characters ({len(title)})"))

    slug = article.get("slug")
    if isinstance(slug, str) and slug and not SLUG_PATTERN.match(slug):
        issues.append(_error("slug", "slug may only contain lowercase letters, digits and hyphens"))

    category = article.get("category")
    if isinstance(category, str) and category and category not in categories:
        issues.append(_error("category", f"invalid category (valid: {', '.join(categories)})"))

    excerpt = article.get("excerpt")
    if isinstance(excerpt, str):
        max_length = ARTICLE_DEFAULTS["excerpt_max_length"]
        if not excerpt:
            issues.append(_error("excerpt", "excerpt is empty"))
        elif len(excerpt) > max_length:
            issues.append(_warning("excerpt", f"excerpt exceeds {max_length} characters ({len(excerpt)})"))

    if article.get("body") is not None:
        issues.extend(_validate_body(article["body"]))

    description = article.get("metaDescription")
    if isinstance(description, str):
        max_length = ARTICLE_DEFAULTS["meta_description_max_length"]
        if not description:
            issues.append(_error("metaDescription", "metaDescription is empty"))
        elif len(description) > max_length:
            issues.append(_warning("metaDescription",
                                   f"metaDescription exceeds {max_length} characters ({len(description)})"))

    cta_type = article.get("ctaType")
    if isinstance(cta_type, str) and cta_type and cta_type not in cta_types:
        issues.append(_error("ctaType", f"invalid ctaType (valid: {', '.join(cta_types)})"))

    youtube_url = _text(article, "youtubeUrl")
    if youtube_url and not any(host in youtube_url for host in YOUTUBE_HOSTS):
        issues.append(_warning("youtubeUrl", "not a YouTube URL"))

    return issues


def review_issues(data: Union[ArticleDraft, Mapping]) -> list[ValidationIssue]:
    """Placeholders and limits a reviewer must fix before publishing."""
    article = _as_record(data)
    issues = []

    # Wrong types are reported by validate_article; here they count as unset
    slug = _text(article, "slug")
    excerpt = _text(article, "excerpt")
    description = _text(article, "metaDescription")

    if slug.startswith(TEMP_SLUG_PREFIX):
        issues.append(_error("slug", "replace the temporary slug with an SEO slug"))
    if not SLUG_PATTERN.match(slug):
        issues.append(_error("slug", "slug may only contain lowercase letters, digits and hyphens"))
    if excerpt.startswith(NEEDS_SETUP_PREFIX):
        issues.append(_error("excerpt", "write a reader-facing excerpt"))
    if description.startswith(NEEDS_SETUP_PREFIX):
        issues.append(_error("metaDescription", "write an SEO meta description"))

    excerpt_max = ARTICLE_DEFAULTS["excerpt_max_length"]
    if len(excerpt) > excerpt_max:
        issues.append(_error("excerpt", f"excerpt must be at most {excerpt_max} characters ({len(excerpt)})"))
    description_max = ARTICLE_DEFAULTS["meta_description_max_length"]
    if len(description) > description_max:
        issues.append(_error("metaDescription",
                             f"metaDescription must be at most {description_max} characters ({len(description)})"))

    return issues


def ensure_publishable(data: Union[ArticleDraft, Mapping]) -> list[ValidationIssue]:
    """
    Run both checks; raise ArticleValidationError if any error remains.

    Returns the (warning-only) issue list otherwise.
    """
    issues = validate_article(data) + review_issues(data)
    errors = [issue for issue in issues if issue.severity == "error"]
    if errors:
        logger.warning(f"Draft not publishable: {len(errors)} errors")
        raise ArticleValidationError(f"{len(errors)} issues must be fixed before publishing",
                                     issues=issues)
    return issues
