"""Runtime configuration, read from the environment once at import."""

import os

# Some platforms reject non-browser clients outright
USER_AGENT: str = os.getenv(
    "BLOGREF_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
)
FETCH_TIMEOUT: float = float(os.getenv("BLOGREF_FETCH_TIMEOUT", "30.0"))

MAX_TAGS = 5

# Image stored for records saved without one
DEFAULT_IMAGE: str = os.getenv("BLOGREF_DEFAULT_IMAGE", "/heroSection.png")

VERBOSE: bool = os.getenv("BLOGREF_VERBOSE", "").lower() in ("1", "true", "yes")

# Web service
HOST: str = os.getenv("BLOGREF_HOST", "0.0.0.0")
PORT: int = int(os.getenv("BLOGREF_PORT", "8000"))
