"""
Read-only configuration tables and extractor settings.

The tables here are the defaults; every stage that needs one takes it as an
explicit argument so tests and callers can substitute their own.
"""

import os
from types import MappingProxyType
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from .schemas import Block, BlockKind, CategoryConfig


# --- Categories ---

CATEGORIES = MappingProxyType({
    "psychology": CategoryConfig(
        label="心理学",
        default_cta="find-coach",
        default_tags=("コーチング", "心理学"),
    ),
    "career": CategoryConfig(
        label="キャリア",
        default_cta="find-coach",
        default_tags=("キャリア", "キャリアコーチング"),
    ),
    "coaching-story": CategoryConfig(
        label="体験談",
        default_cta="find-coach",
        default_tags=("コーチング", "体験談"),
    ),
    "tips": CategoryConfig(
        label="Tips",
        default_cta="find-coach",
        default_tags=("コーチング", "Tips"),
    ),
    "interview": CategoryConfig(
        label="インタビュー",
        default_cta="register-coach",
        default_tags=("コーチング", "インタビュー"),
    ),
})

DEFAULT_CATEGORY = "tips"

CTA_TYPES = MappingProxyType({
    "find-coach": "コーチを探す",
    "register-coach": "コーチ登録",
    "free-trial": "無料体験",
})

# Keyword lists scanned by the tagger, in priority order. Starter lists;
# replace them with the site's SEO keyword table or pass your own to NoteParser.
CATEGORY_KEYWORDS = MappingProxyType({
    "psychology": (
        "心理学", "自己肯定感", "モチベーション", "マインドセット", "認知",
        "感情", "ストレス", "習慣", "自己理解", "コーチング",
    ),
    "career": (
        "キャリア", "転職", "キャリアコーチング", "副業", "独立",
        "スキル", "働き方", "リーダーシップ", "マネジメント", "コーチング",
    ),
    "coaching-story": (
        "体験談", "コーチング", "セッション", "変化", "気づき",
        "目標", "自己理解", "行動", "振り返り",
    ),
    "tips": (
        "コーチング", "Tips", "質問", "傾聴", "目標設定",
        "習慣", "時間管理", "振り返り", "コミュニケーション",
    ),
    "interview": (
        "インタビュー", "コーチング", "コーチ", "資格", "経歴",
        "クライアント", "セッション", "想い",
    ),
})

ARTICLE_DEFAULTS = MappingProxyType({
    "title_max_length": 100,
    "excerpt_max_length": 200,
    "meta_description_max_length": 160,
    "default_cta_type": "find-coach",
})

# Substituted when neither the body container nor the fallback yields blocks
PLACEHOLDER_BLOCKS = (
    Block(kind=BlockKind.HEADING2, text="記事の内容"),
    Block(kind=BlockKind.PARAGRAPH, text="（本文の自動取得ができませんでした。手動で入力してください）"),
)

# Prefix marking fields the reviewer still has to fill in
NEEDS_SETUP_PREFIX = "[要設定]"
TEMP_SLUG_PREFIX = "NEEDS-REVIEW"

REVIEW_GUIDANCE = MappingProxyType({
    "slug": "記事内容を表す英語スラッグを設定（例: brighty-logo-design-concept）",
    "excerpt": "読者の興味を引く200文字以内の要約。ベネフィットを明示",
    "metaDescription": "検索キーワードを含む160文字以内のSEO説明文",
    "tags": "検索されやすいキーワード3-6個",
})


# --- Extractor settings ---

class ExtractorSettings(BaseModel):
    """Where the article body lives on the source page and how to parse it."""
    body_selector: str = ".note-common-styles__textnote-body"
    fallback_selector: str = "article"
    embed_class: str = "note-embed"
    tree_builder: str = "html5lib"    # "html5lib" or "lxml"


def load_settings(env_file: Optional[str] = None) -> ExtractorSettings:
    """
    Build ExtractorSettings, applying NOTE_PARSER_* environment overrides.

    A .env file (or env_file) is loaded first; variables already set in the
    process environment win.
    """
    load_dotenv(env_file)

    overrides = {}
    for field, var in (
        ("body_selector", "NOTE_PARSER_BODY_SELECTOR"),
        ("fallback_selector", "NOTE_PARSER_FALLBACK_SELECTOR"),
        ("embed_class", "NOTE_PARSER_EMBED_CLASS"),
        ("tree_builder", "NOTE_PARSER_TREE_BUILDER"),
    ):
        value = os.getenv(var)
        if value:
            overrides[field] = value

    return ExtractorSettings(**overrides)
