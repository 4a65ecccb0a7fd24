from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import anyio


def ensure_src_on_sys_path(repo_root: Path) -> None:
    """Allow running this script directly without installing the package."""
    src_str = str(repo_root / "src")
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


def normalize_call_tool_result(result: object) -> object:
    """
    `FastMCP.call_tool()` may return a dict, a list of MCP ContentBlocks (commonly
    TextContent holding JSON text), or a `(content, structured)` tuple on newer SDKs.
    """
    if isinstance(result, tuple):
        result = result[0]

    if isinstance(result, dict):
        return result

    if isinstance(result, list):
        texts = [item.text if isinstance(getattr(item, "text", None), str) else str(item) for item in result]
        if len(texts) == 1:
            try:
                return json.loads(texts[0])
            except json.JSONDecodeError:
                return {"content": texts[0]}
        return {"content": texts}

    return {"result": str(result)}


async def main() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    ensure_src_on_sys_path(repo_root)

    # TAVILY_API_KEY is expected to be configured by the IDE/run configuration.
    from tavily_client.server import mcp

    tool = sys.argv[1] if len(sys.argv) > 1 else "tavily_search"
    target = sys.argv[2] if len(sys.argv) > 2 else "who is Leo Messi?"

    if tool == "tavily_search":
        arguments = {"query": target, "max_results": int(os.environ.get("MAX_RESULTS", "5"))}
    elif tool == "tavily_extract":
        arguments = {"urls": [target]}
    else:
        arguments = {"url": target, "max_depth": 1, "limit": 20}

    # This calls the MCP tool handler directly (no MCP host required).
    result = await mcp.call_tool(tool, arguments=arguments)
    print(json.dumps(normalize_call_tool_result(result), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    # Run example:
    #   PYTHONPATH=src python examples/script_run_mcp_tools.py tavily_map https://docs.tavily.com
    anyio.run(main)
