from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Literal

from mcp.server.fastmcp import FastMCP

from .client import TavilyClient
from .models import TavilyCrawlRequest, TavilyExtractRequest, TavilyMapRequest, TavilySearchRequest
from .utils.logging import configure_logging

configure_logging()
LOGGER = logging.getLogger(__name__)

mcp = FastMCP(
    "tavily",
    instructions=(
        "Tavily web search, page extraction, site crawling and site mapping. "
        "Requires TAVILY_API_KEY in the server environment."
    ),
)

Transport = Literal["stdio", "sse", "streamable-http"]


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tavily-mcp-server",
        description="MCP server exposing the Tavily search, extract, crawl and map APIs.",
    )

    transport_group = parser.add_mutually_exclusive_group()
    transport_group.add_argument(
        "--transport",
        choices=("stdio", "sse", "streamable-http"),
        help="Transport to use (default: stdio).",
    )
    transport_group.add_argument(
        "--stdio",
        dest="transport",
        action="store_const",
        const="stdio",
        help="Run using stdio transport (default).",
    )
    transport_group.add_argument(
        "--sse",
        dest="transport",
        action="store_const",
        const="sse",
        help="Run using SSE transport.",
    )
    transport_group.add_argument(
        "--http",
        "--streamable-http",
        dest="transport",
        action="store_const",
        const="streamable-http",
        help="Run using Streamable HTTP transport.",
    )

    parser.add_argument("--host", default=None, help="Bind host for HTTP/SSE transports (overrides FASTMCP_HOST).")
    parser.add_argument(
        "--port", type=int, default=None, help="Bind port for HTTP/SSE transports (overrides FASTMCP_PORT)."
    )
    parser.add_argument("--mount-path", default=None, help="Mount path for SSE transport.")
    return parser


def _resolve_transport(raw: str | None) -> Transport:
    if raw in ("stdio", "sse", "streamable-http"):
        return raw
    return "stdio"


def _resolve_host_port(host: str | None, port: int | None) -> tuple[str, int]:
    resolved_host = host or os.environ.get("FASTMCP_HOST", "127.0.0.1")
    resolved_port_raw = str(port) if port is not None else os.environ.get("FASTMCP_PORT", "8000")
    try:
        resolved_port = int(resolved_port_raw)
    except ValueError:
        resolved_port = 8000
    return resolved_host, resolved_port


@mcp.tool()
async def tavily_search(
    query: str,
    topic: str | None = None,
    search_depth: str | None = None,
    chunks_per_source: int | None = None,
    max_results: int | None = None,
    time_range: str | None = None,
    days: int | None = None,
    include_answer: bool | str | None = None,
    include_raw_content: bool | None = None,
    include_images: bool | None = None,
    include_image_descriptions: bool | None = None,
    include_domains: list[str] | None = None,
    exclude_domains: list[str] | None = None,
) -> dict:
    """Search the web with Tavily.

    Args:
    - query: Search query string.
    - topic: 'general' (default) or 'news'.
    - search_depth: 'basic' (default) or 'advanced'.
    - chunks_per_source: 1-3 content chunks per source (advanced depth only).
    - max_results: 0-20, default 5.
    - time_range: 'day', 'week', 'month' or 'year'.
    - days: Days back to include (news only).
    - include_answer: true, 'basic' or 'advanced' for an LLM-generated answer.
    - include_raw_content / include_images: optional extras.
    - include_image_descriptions: with include_images, return `{"url", "description"}` images.
    - include_domains / exclude_domains: domain filters.

    Returns:
    - `{"query", "answer", "images": [{"url", "description"}], "results": [{"title", "url", "content", "score", "raw_content"}], "response_time", ...}`
    """
    request = TavilySearchRequest(
        query=query,
        topic=topic,
        search_depth=search_depth,
        chunks_per_source=chunks_per_source,
        max_results=max_results,
        time_range=time_range,
        days=days,
        include_answer=include_answer,
        include_raw_content=include_raw_content,
        include_images=include_images,
        include_image_descriptions=include_image_descriptions,
        include_domains=include_domains,
        exclude_domains=exclude_domains,
    )
    response = await TavilyClient.from_env().search(request)
    return response.model_dump()


@mcp.tool()
async def tavily_extract(
    urls: list[str],
    include_images: bool | None = None,
    extract_depth: str | None = None,
) -> dict:
    """Extract the raw content of one or more URLs.

    URLs Tavily could not process are returned in `failed_results` with an error message.
    """
    request = TavilyExtractRequest(urls=urls, include_images=include_images, extract_depth=extract_depth)
    response = await TavilyClient.from_env().extract(request)
    return response.model_dump()


@mcp.tool()
async def tavily_crawl(
    url: str,
    max_depth: int | None = None,
    max_breadth: int | None = None,
    limit: int | None = None,
    instructions: str | None = None,
    select_paths: list[str] | None = None,
    select_domains: list[str] | None = None,
    exclude_paths: list[str] | None = None,
    exclude_domains: list[str] | None = None,
    allow_external: bool | None = None,
    categories: list[str] | None = None,
    extract_depth: str | None = None,
) -> dict:
    """Crawl a site from `url` and return the content of each discovered page.

    Path/domain filters are regular expressions (e.g. `/docs/.*`).
    """
    request = TavilyCrawlRequest(
        url=url,
        max_depth=max_depth,
        max_breadth=max_breadth,
        limit=limit,
        instructions=instructions,
        select_paths=select_paths,
        select_domains=select_domains,
        exclude_paths=exclude_paths,
        exclude_domains=exclude_domains,
        allow_external=allow_external,
        categories=categories,
        extract_depth=extract_depth,
    )
    response = await TavilyClient.from_env().crawl(request)
    return response.model_dump()


@mcp.tool()
async def tavily_map(
    url: str,
    max_depth: int | None = None,
    max_breadth: int | None = None,
    limit: int | None = None,
    instructions: str | None = None,
    select_paths: list[str] | None = None,
    select_domains: list[str] | None = None,
    exclude_paths: list[str] | None = None,
    exclude_domains: list[str] | None = None,
    allow_external: bool | None = None,
    categories: list[str] | None = None,
) -> dict:
    """Map a site from `url`: return discovered URLs only, without page content."""
    request = TavilyMapRequest(
        url=url,
        max_depth=max_depth,
        max_breadth=max_breadth,
        limit=limit,
        instructions=instructions,
        select_paths=select_paths,
        select_domains=select_domains,
        exclude_paths=exclude_paths,
        exclude_domains=exclude_domains,
        allow_external=allow_external,
        categories=categories,
    )
    response = await TavilyClient.from_env().map(request)
    return response.model_dump()


def main(argv: list[str] | None = None) -> None:
    """
    Entrypoint for running the MCP server.

    Notes:
    - Many MCP clients run servers via stdio by default.
    - FastMCP does not parse CLI args by itself; we do it here.
    """
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    transport = _resolve_transport(args.transport)

    if (
        transport == "stdio"
        and sys.stdin.isatty()
        and os.environ.get("MCP_ALLOW_TTY_STDIO", "").strip().lower() not in ("1", "true", "yes")
    ):
        print(
            "Error: `--stdio` transport is intended to be launched by an MCP client (stdin/stdout JSON-RPC).",
            file=sys.stderr,
        )
        print("Tip: for manual testing, run with `--http` (Streamable HTTP) instead.", file=sys.stderr)
        print("Override: set MCP_ALLOW_TTY_STDIO=1 to force stdio even when stdin is a TTY.", file=sys.stderr)
        raise SystemExit(2)

    if not os.environ.get("TAVILY_API_KEY", "").strip():
        # Still start so clients can discover tools; calls fail until the key is set.
        LOGGER.warning("TAVILY_API_KEY is not set; Tavily tool calls will fail until it is provided.")

    if transport in ("sse", "streamable-http"):
        host, port = _resolve_host_port(args.host, args.port)
        for key, value in (("host", host), ("port", port)):
            if hasattr(mcp, "settings") and hasattr(mcp.settings, key):
                setattr(mcp.settings, key, value)

    try:
        mcp.run(transport=transport, mount_path=args.mount_path)
    except TypeError:
        # Older MCP SDKs may not accept `mount_path`.
        mcp.run(transport=transport)


if __name__ == "__main__":
    main()
