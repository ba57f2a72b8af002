"""applovin-max-mcp: Model Context Protocol server for AppLovin MAX reporting."""

import asyncio
import logging
import os
import sys

from .server import app


async def main():
    """Serve revenue_report and cohort_request over stdio until the client disconnects."""
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        await app.run(
            read_stream,
            write_stream,
            app.create_initialization_options()
        )


def configure_logging():
    """Send logs to stderr; stdout carries the MCP protocol stream."""
    level_name = os.getenv('APPLOVIN_MCP_LOG_LEVEL', 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )


def run():
    """Console script entry: configure stderr logging, then serve."""
    configure_logging()
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\napplovin-max-mcp server stopped.", file=sys.stderr)
        sys.exit(0)
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        sys.exit(1)


__version__ = "1.0.0"
__all__ = ["main", "run", "app"]
