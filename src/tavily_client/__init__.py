"""Async client for the Tavily search, extract, crawl and map APIs."""
from __future__ import annotations

from .client import TavilyClient
from .errors import (
    TavilyConfigError,
    TavilyDecodeError,
    TavilyError,
    TavilyHTTPError,
    TavilySerializationError,
    TavilyTimeoutError,
    TavilyTransportError,
)
from .models import (
    TavilyCrawlRequest,
    TavilyCrawlResponse,
    TavilyCrawlResult,
    TavilyExtractFailedResult,
    TavilyExtractRequest,
    TavilyExtractResponse,
    TavilyExtractResult,
    TavilyImage,
    TavilyMapRequest,
    TavilyMapResponse,
    TavilySearchRequest,
    TavilySearchResponse,
    TavilySearchResult,
    parse_images,
)
from .settings import DEFAULT_BASE_URL

__all__ = [
    "DEFAULT_BASE_URL",
    "TavilyClient",
    "TavilyConfigError",
    "TavilyCrawlRequest",
    "TavilyCrawlResponse",
    "TavilyCrawlResult",
    "TavilyDecodeError",
    "TavilyError",
    "TavilyExtractFailedResult",
    "TavilyExtractRequest",
    "TavilyExtractResponse",
    "TavilyExtractResult",
    "TavilyHTTPError",
    "TavilyImage",
    "TavilyMapRequest",
    "TavilyMapResponse",
    "TavilySearchRequest",
    "TavilySearchResponse",
    "TavilySearchResult",
    "TavilySerializationError",
    "TavilyTimeoutError",
    "TavilyTransportError",
    "parse_images",
]
