"""Blog provider registry and hostname detection."""

from urllib.parse import urlparse

from .base import ProviderDefinition, ExtractedMetadata

EXTERNAL_ID = "external"

# Declaration order is match precedence: the first provider whose host occurs
# in the hostname wins, even if a later one is more specific.
PROVIDERS: tuple[ProviderDefinition, ...] = (
    ProviderDefinition("medium", "Medium", ("medium.com",)),
    ProviderDefinition("dev.to", "Dev.to", ("dev.to",)),
    ProviderDefinition("hashnode", "Hashnode", ("hashnode.dev", "hashnode.com")),
    ProviderDefinition("wordpress", "WordPress", ("wordpress.com", "wp.com")),
    ProviderDefinition("substack", "Substack", ("substack.com",)),
    ProviderDefinition("blogger", "Blogger", ("blogspot.com",)),
    ProviderDefinition("ghost", "Ghost", ("ghost.io",)),
    ProviderDefinition("notion", "Notion", ("notion.site", "notion.so")),
)

EXTERNAL = ProviderDefinition(EXTERNAL_ID, "External / Custom")

_BY_ID = {provider.id: provider for provider in PROVIDERS}


def detect_provider(hostname: str) -> str:
    """Return the id of the provider serving ``hostname``, or ``"external"``."""
    normalized = (hostname or "").lower()
    for provider in PROVIDERS:
        if provider.matches(normalized):
            return provider.id
    return EXTERNAL_ID


def detect_provider_from_url(url: str) -> str:
    """Detect the provider from a full URL (scheme optional)."""
    value = (url or "").strip()
    if not value:
        return EXTERNAL_ID
    if "://" not in value:
        value = f"https://{value.lstrip('/')}"
    try:
        hostname = urlparse(value).hostname or ""
    except ValueError:
        return EXTERNAL_ID
    return detect_provider(hostname)


def get_provider(provider_id: str | None) -> ProviderDefinition:
    """Look up a provider by id. Unknown ids degrade to the external provider."""
    return _BY_ID.get(provider_id or "", EXTERNAL)


def normalize_provider_id(provider_id: str | None) -> str:
    return get_provider(provider_id).id


def provider_options() -> list[dict]:
    """Select options for a provider picker, external first."""
    return [
        {"value": provider.id, "label": provider.label}
        for provider in (EXTERNAL, *PROVIDERS)
    ]


__all__ = [
    "ProviderDefinition",
    "ExtractedMetadata",
    "PROVIDERS",
    "EXTERNAL",
    "EXTERNAL_ID",
    "detect_provider",
    "detect_provider_from_url",
    "get_provider",
    "normalize_provider_id",
    "provider_options",
]
