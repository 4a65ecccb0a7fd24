from __future__ import annotations

import logging
import os


def configure_logging() -> None:
    """
    Configure logging for the Tavily MCP server and scripts using `tavily_client`.

    Goals:
    - Keep `httpx`/`httpcore` request logs out of tool output; the client logs its own calls.
    - Leave an already-configured root logger alone (`LOG_LEVEL` only applies otherwise).
    """
    root = logging.getLogger()

    # Only set up basicConfig if nothing configured yet (common for scripts).
    if not root.handlers:
        level = os.environ.get("LOG_LEVEL", "WARNING").upper()
        logging.basicConfig(level=getattr(logging, level, logging.WARNING))

    for name in ("httpx", "httpcore", "asyncio"):
        # `asyncio` can emit noisy warnings about slow callbacks in some environments.
        level = logging.ERROR if name == "asyncio" else logging.WARNING
        logging.getLogger(name).setLevel(level)
