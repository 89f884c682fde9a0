"""Rebuild canonical external links from stored blog identifiers.

Stored identifiers can be full URLs, bare slugs, ``@handle/slug`` fragments or
bare domains. Each provider gets a builder that turns what it can into an
absolute URL and returns None when a link would have to be guessed.
"""

import re

HTTP_RE = re.compile(r"^https?://", re.IGNORECASE)

# Medium post ids are opaque hex strings; shorter tails are ordinary slug words
MEDIUM_MIN_ID_LENGTH = 6


def ensure_protocol(value: str) -> str:
    if HTTP_RE.match(value):
        return value
    return f"https://{value.lstrip('/')}"


def build_medium_url(identifier: str, author: str | None = None) -> str | None:
    """Build a Medium URL from a domain, an ``@handle/...`` path or a slug."""
    if "medium.com" in identifier:
        return ensure_protocol(identifier)

    if identifier.startswith("@") or "/" in identifier:
        return f"https://medium.com/{identifier.lstrip('/')}"

    post_id = identifier.split("-")[-1]
    if len(post_id) >= MEDIUM_MIN_ID_LENGTH:
        return f"https://medium.com/p/{post_id}"

    return None


def build_devto_url(identifier: str, author: str | None = None) -> str | None:
    """Dev.to paths need the author's handle: dev.to/<handle>/<slug>."""
    if not author:
        return None
    handle = re.sub(r"\s+", "", author).lstrip("@").lower()
    if not handle:
        return None
    return f"https://dev.to/{handle}/{identifier.lstrip('/')}"


def build_generic_url(identifier: str, author: str | None = None) -> str | None:
    """Only identifiers that already carry a domain can be turned into links."""
    if "://" in identifier or "." in identifier:
        return ensure_protocol(identifier)
    return None


URL_BUILDERS = {
    "medium": build_medium_url,
    "dev.to": build_devto_url,
}


def resolve_external_url(
    identifier: str | None = None,
    provider: str | None = None,
    author: str | None = None,
) -> str | None:
    """
    Resolve a stored identifier to an absolute URL.

    Args:
        identifier: Stored external id (URL, slug, handle or fragment)
        provider: Provider id; unknown or missing ids use the generic rule
        author: Author name, needed to rebuild Dev.to links

    Returns:
        An absolute http(s) URL, or None when no link can be derived
    """
    if not isinstance(identifier, str):
        return None
    value = identifier.strip()
    if not value:
        return None

    if HTTP_RE.match(value):
        return value

    if not isinstance(author, str):
        author = None

    builder = URL_BUILDERS.get(provider, build_generic_url) if isinstance(provider, str) else build_generic_url
    return builder(value, author)
