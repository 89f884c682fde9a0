"""Provider and metadata types."""

from dataclasses import asdict, dataclass, field
from datetime import date


@dataclass(frozen=True)
class ProviderDefinition:
    """A publishing platform and the hostnames that identify it."""
    id: str
    label: str
    hosts: tuple[str, ...] = ()

    def matches(self, hostname: str) -> bool:
        """Return True if any of this provider's hosts appears in the hostname."""
        return any(host in hostname for host in self.hosts)


@dataclass
class ExtractedMetadata:
    """Normalized metadata scraped from a blog post page."""
    title: str = ""
    excerpt: str = ""
    image: str = ""
    author: str = ""
    date: str = field(default_factory=lambda: date.today().isoformat())
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
