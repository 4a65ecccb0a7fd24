from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .errors import (
    TavilyConfigError,
    TavilyDecodeError,
    TavilyHTTPError,
    TavilySerializationError,
    TavilyTimeoutError,
    TavilyTransportError,
)
from .models import (
    TavilyCrawlRequest,
    TavilyCrawlResponse,
    TavilyExtractRequest,
    TavilyExtractResponse,
    TavilyMapRequest,
    TavilyMapResponse,
    TavilyRequest,
    TavilySearchRequest,
    TavilySearchResponse,
)
from .settings import DEFAULT_BASE_URL, Settings

LOGGER = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=TavilyRequest)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


def _build_request(
    operation: str,
    model: type[RequestT],
    request: Any,
    key: str,
    fields: dict[str, Any],
) -> RequestT:
    if isinstance(request, model) and not fields:
        return request
    try:
        if isinstance(request, model):
            return model.model_validate({**request.model_dump(exclude_none=True), **fields})
        return model(**{key: request}, **fields)
    except ValidationError as exc:
        raise TavilySerializationError(
            f"Tavily {operation}: build request: {exc}", operation=operation, stage="serialize"
        ) from exc


def _encode(operation: str, request: TavilyRequest) -> bytes:
    try:
        return request.to_json_bytes()
    except (TypeError, ValueError) as exc:
        # pydantic's serialization error is a ValueError.
        raise TavilySerializationError(
            f"Tavily {operation}: marshal request: {exc}", operation=operation, stage="serialize"
        ) from exc


def _decode(operation: str, model: type[ResponseT], body: bytes) -> ResponseT:
    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        raise TavilyDecodeError(
            f"Tavily {operation}: parse response: {exc}", operation=operation, stage="decode"
        ) from exc


class TavilyClient:
    """
    Async client for the Tavily REST API.

    Endpoints (all `POST {base_url}{path}`, JSON in and out):
    - /search, /extract, /crawl, /map
    - Header: Authorization: Bearer <api_key>

    The client holds no mutable state after construction, so one instance can serve
    concurrent calls as long as the supplied `http_client` can. When no `http_client`
    is given, each call opens (and closes) its own `httpx.AsyncClient`.

    No timeout is applied unless one is configured here or passed per call. Deadlines
    and cancellation otherwise belong to the caller (`anyio.fail_after`, `asyncio.timeout`,
    task cancellation), which aborts the in-flight request.

    Docs: https://docs.tavily.com/documentation/api-reference/introduction
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._http_client = http_client
        self.timeout = timeout

    @classmethod
    def from_env(cls, *, http_client: httpx.AsyncClient | None = None) -> "TavilyClient":
        settings = Settings.from_env()
        if not settings.tavily_api_key:
            raise TavilyConfigError(
                "TAVILY_API_KEY is not set. Configure it as an environment variable in your IDE/run configuration.",
                stage="config",
            )
        return cls(
            settings.tavily_api_key,
            base_url=settings.tavily_base_url,
            http_client=http_client,
            timeout=settings.tavily_timeout_seconds,
        )

    def __repr__(self) -> str:
        return f"TavilyClient(base_url={self.base_url!r})"

    async def _post(self, operation: str, path: str, payload: bytes, *, timeout: float | None = None) -> bytes:
        url = f"{self.base_url}{path}"
        headers = {"Authorization": f"Bearer {self._api_key}", "Content-Type": "application/json"}

        if timeout is None:
            timeout = self.timeout
        request_timeout: Any = httpx.USE_CLIENT_DEFAULT if timeout is None else timeout

        async def _do_request(client: httpx.AsyncClient) -> httpx.Response:
            try:
                return await client.post(url, content=payload, headers=headers, timeout=request_timeout)
            except httpx.TimeoutException as exc:
                raise TavilyTimeoutError(
                    f"Tavily {operation}: call {path} api timed out: {type(exc).__name__}",
                    operation=operation,
                    stage="request",
                ) from exc
            except httpx.RequestError as exc:
                raise TavilyTransportError(
                    f"Tavily {operation}: call {path} api: {type(exc).__name__}: {exc}",
                    operation=operation,
                    stage="request",
                ) from exc

        LOGGER.debug("Tavily %s: POST %s (%d bytes)", operation, url, len(payload))
        if self._http_client is None:
            async with httpx.AsyncClient(timeout=None) as client:
                resp = await _do_request(client)
        else:
            resp = await _do_request(self._http_client)

        if resp.status_code != httpx.codes.OK:
            LOGGER.warning("Tavily %s: %s returned HTTP %d", operation, path, resp.status_code)
            raise TavilyHTTPError(
                f"Tavily {operation}: response status code: {resp.status_code}, response body: {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
                operation=operation,
            )
        return resp.content

    async def _call(
        self,
        operation: str,
        path: str,
        request: TavilyRequest,
        response_model: type[ResponseT],
        *,
        timeout: float | None,
    ) -> ResponseT:
        payload = _encode(operation, request)
        body = await self._post(operation, path, payload, timeout=timeout)
        return _decode(operation, response_model, body)

    async def search(
        self,
        request: TavilySearchRequest | str,
        *,
        timeout: float | None = None,
        **fields: Any,
    ) -> TavilySearchResponse:
        """Run a web search. `request` is a request model or the query text (other fields as keywords)."""
        search_request = _build_request("search", TavilySearchRequest, request, "query", fields)
        return await self._call("search", "/search", search_request, TavilySearchResponse, timeout=timeout)

    async def extract(
        self,
        request: TavilyExtractRequest | list[str] | str,
        *,
        timeout: float | None = None,
        **fields: Any,
    ) -> TavilyExtractResponse:
        """
        Extract page content from one or more URLs.

        URLs that Tavily could not process are listed in `failed_results`; that is a
        normal response, not an error.
        """
        if isinstance(request, str):
            request = [request]
        extract_request = _build_request("extract", TavilyExtractRequest, request, "urls", fields)
        return await self._call("extract", "/extract", extract_request, TavilyExtractResponse, timeout=timeout)

    async def crawl(
        self,
        request: TavilyCrawlRequest | str,
        *,
        timeout: float | None = None,
        **fields: Any,
    ) -> TavilyCrawlResponse:
        """Crawl from a root URL and return the content of each discovered page."""
        crawl_request = _build_request("crawl", TavilyCrawlRequest, request, "url", fields)
        return await self._call("crawl", "/crawl", crawl_request, TavilyCrawlResponse, timeout=timeout)

    async def map(
        self,
        request: TavilyMapRequest | str,
        *,
        timeout: float | None = None,
        **fields: Any,
    ) -> TavilyMapResponse:
        """Discover URLs from a root URL without fetching their content."""
        map_request = _build_request("map", TavilyMapRequest, request, "url", fields)
        return await self._call("map", "/map", map_request, TavilyMapResponse, timeout=timeout)
