"""Shared fixtures: HTML pages and mocked httpx clients."""

import httpx
import pytest


def make_page(head: str = "", body: str = "") -> str:
    return f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"


def mock_client(handler) -> httpx.AsyncClient:
    """An AsyncClient whose requests are answered by ``handler`` instead of the network."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)


def html_response(html: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, text=html, headers={"content-type": "text/html; charset=utf-8"})


@pytest.fixture
def full_page():
    return make_page(
        head="""
        <title>Fallback title</title>
        <meta property="og:title" content="OG Title">
        <meta name="twitter:title" content="Twitter Title">
        <meta property="og:description" content="OG description">
        <meta property="og:image" content="https://cdn.example.com/cover.png">
        <meta property="article:author" content="Jane Doe">
        <meta property="article:published_time" content="2024-03-05T09:30:00Z">
        <meta property="article:tag" content="python">
        <meta property="article:tag" content="scraping">
        """,
    )
