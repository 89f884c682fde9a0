"""blogref web service - FastAPI backend."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from rich.console import Console

from .errors import FetchError, ParseError, ValidationError
from .extractor import extract_metadata
from .providers import detect_provider_from_url, provider_options
from .resolver import resolve_external_url

console = Console(stderr=True)

app = FastAPI(title="blogref", description="Blog post metadata extraction and link resolution")


class ExtractRequest(BaseModel):
    url: str | None = None


class MetadataResponse(BaseModel):
    title: str
    excerpt: str
    image: str
    author: str
    date: str
    tags: list[str]


class ResolveRequest(BaseModel):
    external_id: str | None = None
    provider: str | None = None
    author: str | None = None


class ResolveResponse(BaseModel):
    url: str | None = None


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": f"Invalid request: {message}"})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(FetchError)
async def fetch_error_handler(request: Request, exc: FetchError):
    console.print(f"[yellow]{exc}[/yellow]")
    return JSONResponse(status_code=400, content={"error": "Failed to fetch URL"})


@app.exception_handler(ParseError)
async def parse_error_handler(request: Request, exc: ParseError):
    console.print(f"[red]Error extracting metadata: {exc}[/red]")
    return JSONResponse(status_code=500, content={"error": "Failed to extract metadata"})


@app.post("/api/extract-blog-metadata")
async def extract_blog_metadata(request: ExtractRequest) -> MetadataResponse:
    """Fetch a blog post URL and return its metadata."""
    metadata = await extract_metadata(request.url or "")
    return MetadataResponse(**metadata.to_dict())


@app.post("/api/resolve-blog-url")
async def resolve_blog_url(request: ResolveRequest) -> ResolveResponse:
    """Rebuild the external link for a stored record. ``url`` is null when none can be built."""
    return ResolveResponse(url=resolve_external_url(request.external_id, request.provider, request.author))


@app.get("/api/detect-provider")
async def detect_provider(url: str = "") -> dict:
    return {"provider": detect_provider_from_url(url)}


@app.get("/api/providers")
async def list_providers() -> list[dict]:
    return provider_options()


if __name__ == "__main__":
    import uvicorn

    from . import config

    uvicorn.run(app, host=config.HOST, port=config.PORT)
