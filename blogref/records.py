"""Blog reference records and the helpers that prepare them for storage."""

import re
from dataclasses import asdict, dataclass, field, replace
from typing import Iterable

from . import config
from .errors import ValidationError
from .providers import normalize_provider_id
from .providers.base import ExtractedMetadata
from .resolver import HTTP_RE, resolve_external_url

REQUIRED_FIELDS = ("title", "excerpt", "author")


@dataclass
class BlogExternalRef:
    """A stored pointer to a blog post hosted on another platform."""
    external_id: str
    provider: str = "external"
    title: str = ""
    excerpt: str = ""
    image: str = ""
    author: str = ""
    date: str = ""
    slug: str = ""
    tags: list[str] = field(default_factory=list)
    id: str | None = None

    def __post_init__(self):
        self.provider = normalize_provider_id(self.provider)

    @classmethod
    def from_dict(cls, data: dict) -> "BlogExternalRef":
        return cls(
            id=data.get("id"),
            external_id=data.get("external_id") or "",
            provider=data.get("provider") or "external",
            title=data.get("title") or "",
            excerpt=data.get("excerpt") or "",
            image=data.get("image") or "",
            author=data.get("author") or "",
            date=data.get("date") or "",
            slug=data.get("slug") or "",
            tags=parse_tags(data.get("tags")),
        )

    def to_dict(self) -> dict:
        return asdict(self)

    @property
    def external_url(self) -> str | None:
        return resolve_external_url(self.external_id, self.provider, self.author)


def normalize_url_input(value: str | None) -> str:
    """Trim user input and give it an https:// scheme if it has none."""
    if not value:
        return ""
    trimmed = value.strip()
    if not trimmed:
        return ""
    if HTTP_RE.match(trimmed):
        return trimmed
    return f"https://{trimmed}"


def should_normalize_to_url(value: str | None) -> bool:
    """True for input that looks like a URL rather than a slug or handle."""
    if not value:
        return False
    return bool(HTTP_RE.match(value)) or "." in value


def generate_slug(title: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", (title or "").lower()).strip("-")


def parse_tags(value: str | Iterable[str] | None) -> list[str]:
    """Accept "a, b, c" or a list and return the trimmed, non-empty tags."""
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [tag.strip() for tag in value if isinstance(tag, str) and tag.strip()]


def resolve_stored_external_id(external_id: str | None, slug: str = "", title: str = "") -> str:
    """Pick the identifier to persist for a record."""
    value = (external_id or "").strip()
    if value:
        return normalize_url_input(value) if should_normalize_to_url(value) else value
    return slug.strip() or generate_slug(title)


def merge_metadata(ref: BlogExternalRef, metadata: ExtractedMetadata) -> BlogExternalRef:
    """
    Overlay freshly extracted metadata onto a record.

    Only non-empty extracted fields replace stored values, so a partial
    extraction never blanks out data the user already entered.

    The date is the exception: the extractor falls back to today's date when a
    page has none, so ``metadata.date`` is never empty and always replaces the
    stored date.
    """
    merged = replace(
        ref,
        title=metadata.title or ref.title,
        excerpt=metadata.excerpt or ref.excerpt,
        image=metadata.image or ref.image,
        author=metadata.author or ref.author,
        date=metadata.date or ref.date,
        tags=list(metadata.tags) or list(ref.tags),
    )
    if not merged.slug:
        merged.slug = generate_slug(metadata.title)
    return merged


def build_ref(
    *,
    external_id: str | None,
    title: str,
    excerpt: str,
    author: str,
    provider: str | None = None,
    image: str = "",
    date: str = "",
    slug: str = "",
    tags: str | Iterable[str] | None = None,
    id: str | None = None,
) -> BlogExternalRef:
    """
    Validate submitted form data and build the record to persist.

    Raises:
        ValidationError: title, excerpt or author is blank
    """
    values = {"title": title, "excerpt": excerpt, "author": author}
    missing = [name for name in REQUIRED_FIELDS if not (values[name] or "").strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    title = title.strip()
    slug = (slug or "").strip() or generate_slug(title)

    return BlogExternalRef(
        id=id,
        external_id=resolve_stored_external_id(external_id, slug, title),
        provider=provider or "external",
        title=title,
        excerpt=excerpt.strip(),
        image=(image or "").strip() or config.DEFAULT_IMAGE,
        author=author.strip(),
        date=date or "",
        slug=slug,
        tags=parse_tags(tags),
    )


def blog_link(ref: BlogExternalRef) -> tuple[str, bool]:
    """Return (href, is_external): the external URL if one resolves, else the local post page."""
    url = ref.external_url
    if url:
        return url, True
    return f"/blog/{ref.slug}", False
