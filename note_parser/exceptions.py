"""
Custom exceptions for the note article parser.

Error philosophy:
  - Extraction never raises on sparse or malformed markup; "nothing found"
    is an empty block list and the caller applies the fallback policy.
  - BlockInvariantError  → FAIL HARD: a block handed to the projector breaks
    the block model (heading with segments, link without url).
  - UnknownCategoryError → FAIL HARD: the article pipeline has no
    configuration for the requested category.
  - ArticleValidationError → FAIL HARD at publish time: the draft still has
    error-severity issues that a reviewer must fix.
"""

from typing import Optional


class NoteParserError(Exception):
    """Base exception for all note parser errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class BlockInvariantError(NoteParserError):
    """Raised when a block violates the block model's invariants."""

    def __init__(self, message: str, index: Optional[int] = None,
                 details: Optional[dict] = None):
        super().__init__(message, details)
        # Position of the offending block in the input sequence
        self.index = index


class UnknownCategoryError(NoteParserError):
    """Raised when a category id has no entry in the category table."""

    def __init__(self, category: str, known: Optional[list[str]] = None):
        known = known or []
        super().__init__(
            f"Unknown category '{category}' (valid: {', '.join(known)})",
            details={"category": category, "known": known}
        )
        self.category = category


class ArticleValidationError(NoteParserError):
    """
    Raised by ensure_publishable when a draft is not ready for the CMS.

    Carries the full issue list so callers can report every problem at once.
    """

    def __init__(self, message: str, issues: Optional[list] = None):
        super().__init__(message, details={"issue_count": len(issues or [])})
        self.issues = issues or []
