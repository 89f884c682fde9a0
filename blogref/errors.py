"""Errors raised by blogref."""


class BlogRefError(Exception):
    """Base class for all blogref errors."""


class ValidationError(BlogRefError):
    """Missing or malformed input. Never retried."""


class FetchError(BlogRefError):
    """The page could not be fetched (transport failure, bad status, timeout or cancel)."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        message = f"Failed to fetch {url}: {reason}"
        if status_code is not None:
            message += f" (HTTP {status_code})"
        super().__init__(message)


class ParseError(BlogRefError):
    """The fetched body could not be interpreted as an HTML document."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to parse {url}: {reason}")
