"""
Page loading and page-level metadata.

Turns a saved note page into a BeautifulSoup tree and reads the metadata
the draft needs besides the body: title, description and a temporary slug.
"""

import re
import time
from typing import Optional

from bs4 import BeautifulSoup, FeatureNotFound

from .config import TEMP_SLUG_PREFIX
from .logger import get_module_logger

logger = get_module_logger("page")

DEFAULT_TITLE = "無題の記事"

# WHATWG encoding labels that browsers decode with a different charset
# https://encoding.spec.whatwg.org/#names-and-labels
WHATWG_CHARSET_MAP = {
    'iso-8859-1': 'windows-1252',
    'iso8859-1': 'windows-1252',
    'latin1': 'windows-1252',
    'latin-1': 'windows-1252',
    'us-ascii': 'windows-1252',
    'ascii': 'windows-1252',
    'iso-8859-9': 'windows-1254',
    'x-sjis': 'shift_jis',
    'ms_kanji': 'shift_jis',
}

META_CHARSET = re.compile(r'<meta[^>]+charset=["\']?\s*([^\s"\';>]+)', re.IGNORECASE)
META_CONTENT_CHARSET = re.compile(r'<meta[^>]+content=["\'][^"\']*charset=([^\s"\';>]+)',
                                  re.IGNORECASE)

# Site name suffix after a full-width or ASCII bar: "タイトル｜著者名"
SITE_SUFFIX = re.compile(r'[｜|].+$')
EMOJI = re.compile(r'[\U0001F300-\U0001F9FF☀-⛿✀-➿]')
NOTE_ID = re.compile(r'/n/([a-zA-Z0-9]+)')


def detect_charset_from_bytes(raw_bytes: bytes) -> str:
    """
    Find the charset a saved page declares in its first 2048 bytes.

    Checks <meta charset=...> first, then the http-equiv content form, and
    maps the label the way browsers do. Defaults to 'utf-8'.
    """
    head = raw_bytes[:2048].decode('ascii', errors='ignore')

    m = META_CHARSET.search(head) or META_CONTENT_CHARSET.search(head)
    if not m:
        return 'utf-8'

    charset = m.group(1).strip().lower()
    return WHATWG_CHARSET_MAP.get(charset, charset)


def load_document(html: str, tree_builder: str = "html5lib") -> BeautifulSoup:
    """
    Parse page HTML.

    When the requested tree builder is not installed, lxml is tried next and
    Python's built-in html.parser last (always available).
    """
    # NULL bytes are never valid in text content and trip some builders
    html = html.replace('\x00', '')
    try:
        return BeautifulSoup(html, tree_builder)
    except FeatureNotFound:
        logger.warning(f"Tree builder '{tree_builder}' not installed, trying lxml")

    try:
        return BeautifulSoup(html, 'lxml')
    except FeatureNotFound:
        logger.warning("lxml not installed either, using html.parser")
        return BeautifulSoup(html, 'html.parser')


def load_file(path, tree_builder: str = "html5lib") -> BeautifulSoup:
    """Read a saved page, decoding with the charset it declares."""
    with open(path, 'rb') as f:
        raw_bytes = f.read()
    charset = detect_charset_from_bytes(raw_bytes)
    try:
        html = raw_bytes.decode(charset, errors='replace')
    except LookupError:
        logger.warning(f"Unknown charset '{charset}' in {path}, decoding as utf-8")
        html = raw_bytes.decode('utf-8', errors='replace')
    return load_document(html, tree_builder)


def _meta_content(soup: BeautifulSoup, **attrs) -> str:
    tag = soup.find('meta', attrs=attrs)
    if tag is None:
        return ""
    return tag.get('content') or ""


def extract_title(soup: BeautifulSoup) -> str:
    """Article title without the site-name suffix and emoji."""
    title = _meta_content(soup, property='og:title')
    if not title:
        h1 = soup.find('h1')
        title = h1.get_text().strip() if h1 is not None else ""
    title = title or DEFAULT_TITLE

    title = SITE_SUFFIX.sub('', title).strip()
    return EMOJI.sub('', title).strip()


def extract_description(soup: BeautifulSoup) -> str:
    return (_meta_content(soup, property='og:description')
            or _meta_content(soup, name='description'))


def temp_slug(url: str, now_ms: Optional[int] = None) -> str:
    """
    Placeholder slug the reviewer must replace before publishing.

    Uses the note id from the URL, or the current time in milliseconds.
    """
    m = NOTE_ID.search(url)
    if m:
        note_id = m.group(1)
    else:
        note_id = str(now_ms if now_ms is not None else int(time.time() * 1000))
    return f"{TEMP_SLUG_PREFIX}-{note_id}"
