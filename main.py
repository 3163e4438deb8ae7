# =============================================================================
# main.py  -  Entry Point for the Crunchbase MCP Server
# =============================================================================
#
# HOW TO RUN:
#   CRUNCHBASE_API_KEY=... uv run python main.py
#   (or put CRUNCHBASE_API_KEY in a .env file next to this script)
#
# WHAT HAPPENS:
#   1. Settings are loaded once (core/config.py).  No API key, no server:
#      we exit with status 1 before the MCP transport is opened.
#   2. Logging is pointed at STDERR.  STDOUT belongs to the MCP stdio
#      protocol; a stray print() there would corrupt the message stream.
#   3. One CrunchbaseClient (one pooled HTTP connection set) is created and
#      wrapped in a CrunchbaseRouter, then registered with FastMCP.
#   4. The server runs until interrupted (Ctrl+C / SIGINT), at which point
#      the HTTP client is closed and the process exits cleanly.
# =============================================================================

import asyncio
import logging
import sys

from core.config import Settings, load_settings
from core.crunchbase import CrunchbaseClient
from core.errors import ConfigurationError
from tools.mcp_server import create_server
from tools.router import CrunchbaseRouter

logger = logging.getLogger("crunchbase_mcp")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


async def serve(settings: Settings) -> None:
    """Run the MCP server on stdio until cancelled."""
    async with CrunchbaseClient(settings) as client:
        mcp = create_server(CrunchbaseRouter(client))
        logger.info("Crunchbase MCP server running on stdio (%s)", settings.base_url)
        await mcp.run_async()


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, connection closed")


if __name__ == "__main__":
    main()
