"""Extract normalized metadata from blog post pages.

Every field is read through an ordered chain of small extractor functions.
The first one returning a non-empty string wins, so the chains read top to
bottom in order of trust: Open Graph, then Twitter cards, then generic meta
tags, then platform markup.
"""

import asyncio
from datetime import date, datetime, timezone
from typing import Callable
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from dateutil import parser as dateutil_parser
from rich.console import Console

from . import config
from .errors import ParseError, ValidationError
from .fetcher import fetch_html
from .providers.base import ExtractedMetadata

console = Console(stderr=True)

FieldExtractor = Callable[[BeautifulSoup], str]

# Scraped "authors" that are really the platform's own branding
PLATFORM_NAMES = frozenset(
    {"substack", "medium", "dev.to", "hashnode", "wordpress", "blogger", "ghost", "notion"}
)

# Responses with these content types are never HTML
BINARY_CONTENT_TYPES = ("image/", "audio/", "video/", "font/", "application/pdf",
                        "application/octet-stream", "application/zip")


# ---------------------------------------------------------------------------
# Selector primitives
# ---------------------------------------------------------------------------

def meta_property(prop: str) -> FieldExtractor:
    def extract(soup: BeautifulSoup) -> str:
        tag = soup.find("meta", attrs={"property": prop})
        return (tag.get("content") or "") if tag else ""
    return extract


def meta_name(name: str) -> FieldExtractor:
    def extract(soup: BeautifulSoup) -> str:
        tag = soup.find("meta", attrs={"name": name})
        return (tag.get("content") or "") if tag else ""
    return extract


def element_text(selector: str) -> FieldExtractor:
    """Concatenated text of every element matching ``selector``."""
    def extract(soup: BeautifulSoup) -> str:
        return "".join(elem.get_text() for elem in soup.select(selector))
    return extract


def first_element_text(selector: str) -> FieldExtractor:
    def extract(soup: BeautifulSoup) -> str:
        elem = soup.select_one(selector)
        return elem.get_text() if elem else ""
    return extract


def title_tag(soup: BeautifulSoup) -> str:
    tag = soup.find("title")
    return tag.get_text() if tag else ""


def time_datetime(soup: BeautifulSoup) -> str:
    tag = soup.find("time", attrs={"datetime": True})
    return tag["datetime"] if tag else ""


def first_of(soup: BeautifulSoup, chain: list[FieldExtractor]) -> str:
    """Run extractors in order and return the first non-empty result."""
    for extract in chain:
        value = extract(soup)
        if value:
            return value
    return ""


# ---------------------------------------------------------------------------
# Fallback chains
# ---------------------------------------------------------------------------

TITLE_CHAIN: list[FieldExtractor] = [
    meta_property("og:title"),
    meta_name("twitter:title"),
    title_tag,
]

EXCERPT_CHAIN: list[FieldExtractor] = [
    meta_property("og:description"),
    meta_name("twitter:description"),
    meta_name("description"),
]

IMAGE_CHAIN: list[FieldExtractor] = [
    meta_property("og:image"),
    meta_name("twitter:image"),
]

AUTHOR_CHAIN: list[FieldExtractor] = [
    meta_property("article:author"),
    meta_name("author"),
    meta_property("author"),
    meta_name("twitter:creator"),
    element_text('a[rel="author"]'),
    # Medium
    element_text('[data-testid="authorName"]'),
    element_text('a[data-action="show-user-card"]'),
    # Ghost / WordPress themes
    element_text(".author-name"),
    first_element_text('span[data-testid="authorName"]'),
    first_element_text(".byline-name, .entry-author-name, .post-author-name, .post-full-byline-content"),
]

DATE_CHAIN: list[FieldExtractor] = [
    meta_property("article:published_time"),
    meta_name("publish_date"),
    time_datetime,
]


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def today() -> str:
    return date.today().isoformat()


def utc_date(value: datetime) -> str:
    """Calendar date of ``value`` in UTC; naive values are taken as written."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date().isoformat()


def normalize_date(value: str) -> str:
    """Return ``value`` as YYYY-MM-DD, or today's date if it cannot be parsed."""
    value = (value or "").strip()
    if not value:
        return today()

    try:
        return utc_date(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError:
        pass

    try:
        return utc_date(dateutil_parser.parse(value))
    except (ValueError, OverflowError, dateutil_parser.ParserError):
        console.print(f"[yellow]Warning: could not parse date {value!r}, using today[/yellow]")
        return today()


def normalize_author(value: str) -> str:
    """Clean a scraped author, dropping links and platform branding."""
    author = (value or "").strip().split("\n")[0].strip()
    if author.startswith("http"):
        return ""
    if author.lower() in PLATFORM_NAMES:
        return ""
    return author


def author_from_url(url: str) -> str:
    """Infer an author handle from platform URL conventions."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return ""
    host = (parsed.hostname or "").lower()
    parts = [part for part in parsed.path.split("/") if part]

    # medium.com/@user/post, substack.com/@user/p/post
    if "medium.com" in host or "substack.com" in host:
        handle = next((part for part in parts if part.startswith("@")), None)
        if handle:
            return handle[1:]

    # dev.to/user/post
    if "dev.to" in host and parts and "." not in parts[0]:
        return parts[0]

    return ""


def extract_tags(soup: BeautifulSoup) -> list[str]:
    tags = [
        tag.get("content")
        for tag in soup.find_all("meta", attrs={"property": "article:tag"})
        if tag.get("content")
    ]

    if not tags:
        keywords = meta_name("keywords")(soup)
        if keywords:
            tags = [tag.strip() for tag in keywords.split(",") if tag.strip()]

    return tags[:config.MAX_TAGS]


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def parse_metadata(html: str, url: str) -> ExtractedMetadata:
    """
    Build a metadata record from already-fetched HTML.

    Args:
        html: Page markup
        url: The page URL, used to infer the author when the markup has none

    Returns:
        A fully defaulted ExtractedMetadata

    Raises:
        ParseError: the markup was rejected by the parser
    """
    try:
        soup = BeautifulSoup(html, "lxml")
    except ParserRejectedMarkup as e:
        raise ParseError(url, str(e)) from e

    author = normalize_author(first_of(soup, AUTHOR_CHAIN))
    if not author:
        author = author_from_url(url)

    return ExtractedMetadata(
        title=first_of(soup, TITLE_CHAIN),
        excerpt=first_of(soup, EXCERPT_CHAIN),
        image=first_of(soup, IMAGE_CHAIN),
        author=author,
        date=normalize_date(first_of(soup, DATE_CHAIN)),
        tags=extract_tags(soup),
    )


def validate_url(url: str) -> str:
    """Return the trimmed URL, or raise ValidationError if it is not absolute http(s)."""
    if not url or not url.strip():
        raise ValidationError("URL is required")
    url = url.strip()
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise ValidationError(f"Invalid URL: {url}") from e
    if parsed.scheme.lower() not in ("http", "https") or not parsed.netloc:
        raise ValidationError(f"Invalid URL: {url}")
    # httpx is stricter than urlparse (control characters, bad ports, bad IDNA)
    try:
        httpx.URL(url)
    except httpx.InvalidURL as e:
        raise ValidationError(f"Invalid URL: {url!r}") from e
    return url


async def extract_metadata(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> ExtractedMetadata:
    """
    Fetch a blog post and extract its metadata.

    Args:
        url: Absolute URL of the post
        client: Optional shared httpx client
        timeout: Request timeout in seconds
        cancel: Optional event that aborts the fetch when set

    Returns:
        ExtractedMetadata with every field populated or defaulted

    Raises:
        ValidationError: url is missing or not an absolute http(s) URL
        FetchError: the page could not be fetched
        ParseError: the response is not an HTML document
    """
    url = validate_url(url)
    response = await fetch_html(url, client=client, timeout=timeout, cancel=cancel)

    content_type = response.headers.get("content-type", "").lower()
    if content_type.startswith(BINARY_CONTENT_TYPES):
        raise ParseError(url, f"unsupported content type {content_type}")

    return parse_metadata(response.text, url)
