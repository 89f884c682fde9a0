"""Blog post metadata extraction and external link resolution."""

from .errors import BlogRefError, FetchError, ParseError, ValidationError
from .extractor import extract_metadata, parse_metadata
from .providers import (
    PROVIDERS,
    ExtractedMetadata,
    ProviderDefinition,
    detect_provider,
    detect_provider_from_url,
)
from .records import BlogExternalRef, blog_link, build_ref, merge_metadata
from .resolver import resolve_external_url

__version__ = "0.1.0"

__all__ = [
    "BlogRefError",
    "FetchError",
    "ParseError",
    "ValidationError",
    "extract_metadata",
    "parse_metadata",
    "PROVIDERS",
    "ExtractedMetadata",
    "ProviderDefinition",
    "detect_provider",
    "detect_provider_from_url",
    "BlogExternalRef",
    "blog_link",
    "build_ref",
    "merge_metadata",
    "resolve_external_url",
]
