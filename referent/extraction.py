"""
Article fetching and extraction for Referent.

Fetches a user-supplied article URL and pulls title, publish date and main
text out of the HTML using ordered CSS selector lists. Every selector tier is
optional: a tier that finds nothing hands over to the next one, and a field
nothing matches comes back as None.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import requests
from bs4 import BeautifulSoup

FETCH_TIMEOUT_SECONDS = 15
USER_AGENT = 'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'

BROWSER_HEADERS = {
    'User-Agent': USER_AGENT,
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7',
    'Accept-Language': 'en-US,en;q=0.9,ru;q=0.8',
    'Accept-Encoding': 'gzip, deflate',
    'DNT': '1',
    'Connection': 'keep-alive',
    'Upgrade-Insecure-Requests': '1',
    'Sec-Fetch-Dest': 'document',
    'Sec-Fetch-Mode': 'navigate',
    'Sec-Fetch-Site': 'none',
    'Sec-Fetch-User': '?1',
    'Cache-Control': 'max-age=0',
}

_WHITESPACE_RE = re.compile(r'\s+')


@dataclass(frozen=True)
class SelectorRules:
    """Ordered selector lists driving extract_article()."""
    title: Sequence[str]
    date: Sequence[str]
    content: Sequence[str]
    noise: Sequence[str] = field(default_factory=tuple)
    min_content_length: int = 100


DEFAULT_SELECTOR_RULES = SelectorRules(
    title=(
        'h1',
        'article h1',
        '.post-title',
        '.article-title',
        '[class*="title"]',
        'title',
    ),
    date=(
        'time[datetime]',
        'time',
        '[class*="date"]',
        '[class*="published"]',
        '[class*="time"]',
        'meta[property="article:published_time"]',
        'meta[name="publish-date"]',
        'meta[name="date"]',
    ),
    content=(
        'article',
        '.post',
        '.content',
        '.article-content',
        '[class*="article"]',
        '[class*="post-content"]',
        '[class*="entry-content"]',
        'main',
    ),
    noise=('script', 'style', 'nav', 'aside', '.ad', '.advertisement'),
)


@dataclass(frozen=True)
class ParsedArticle:
    title: Optional[str] = None
    date: Optional[str] = None
    content: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'title': self.title,
            'date': self.date,
            'content': self.content,
        }


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space and trim."""
    if not text:
        return ''
    return _WHITESPACE_RE.sub(' ', text).strip()


def fetch_article_html(url: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Fetch article HTML. Returns (html, error).

    Sends a desktop-browser header set and gives up after 15 seconds. A
    response without a declared charset is decoded as UTF-8, or with the
    detected encoding when the bytes are not valid UTF-8.
    """
    try:
        response = requests.get(
            url,
            headers=BROWSER_HEADERS,
            timeout=FETCH_TIMEOUT_SECONDS,
            allow_redirects=True
        )
        response.raise_for_status()

        if 'charset' not in response.headers.get('Content-Type', '').lower():
            response.encoding = 'utf-8' if _is_utf8(response.content) else response.apparent_encoding

        return response.text, None

    except requests.exceptions.Timeout:
        return None, 'Request timed out'
    except requests.exceptions.HTTPError as e:
        return None, f'HTTP error: {e.response.status_code}'
    except requests.exceptions.RequestException as e:
        return None, f'Request failed: {str(e)}'


def _is_utf8(content: bytes) -> bool:
    try:
        content.decode('utf-8')
    except UnicodeDecodeError:
        return False
    return True


def extract_title(soup: BeautifulSoup, selectors: Sequence[str]) -> Optional[str]:
    """Return the first non-empty text among the title selectors."""
    for selector in selectors:
        element = soup.select_one(selector)
        if element is None:
            continue
        text = normalize_whitespace(element.get_text(' '))
        if text:
            return text

    # Selector lists without 'title' still fall back to the document title
    title_tag = soup.find('title')
    if title_tag:
        return normalize_whitespace(title_tag.get_text(' ')) or None
    return None


def extract_date(soup: BeautifulSoup, selectors: Sequence[str]) -> Optional[str]:
    """
    Return the first usable publish date.

    For each matching element the machine-readable attribute (datetime, then
    content) wins over the visible text.
    """
    for selector in selectors:
        element = soup.select_one(selector)
        if element is None:
            continue

        attribute = element.get('datetime') or element.get('content')
        if attribute and attribute.strip():
            return attribute.strip()

        text = normalize_whitespace(element.get_text(' '))
        if text:
            return text

    return None


def _strip_noise(element, noise: Sequence[str]) -> None:
    if not noise:
        return
    for junk in element.select(', '.join(noise)):
        junk.decompose()


def extract_content(soup: BeautifulSoup, rules: SelectorRules) -> Optional[str]:
    """
    Return the main article text.

    Takes the first container whose cleaned, trimmed text is longer than
    min_content_length; length is measured before whitespace is collapsed.
    When no container qualifies the whole body is used, however short.
    """
    for selector in rules.content:
        container = soup.select_one(selector)
        if container is None:
            continue
        _strip_noise(container, rules.noise)
        if len(container.get_text().strip()) > rules.min_content_length:
            return normalize_whitespace(container.get_text(' '))

    body = soup.find('body') or soup
    _strip_noise(body, rules.noise)
    return normalize_whitespace(body.get_text(' ')) or None


def extract_article(html: str, rules: SelectorRules = DEFAULT_SELECTOR_RULES) -> ParsedArticle:
    """Extract title, date and content from raw HTML."""
    if not html:
        return ParsedArticle()

    # html.parser never rejects malformed markup
    soup = BeautifulSoup(html, 'html.parser')

    # Content last: noise removal mutates the tree
    title = extract_title(soup, rules.title)
    date = extract_date(soup, rules.date)
    content = extract_content(soup, rules)

    return ParsedArticle(title=title, date=date, content=content)
