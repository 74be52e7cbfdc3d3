#!/usr/bin/env python3
"""
iMessage Contacts MCP Server - contact lookup for iMessage handles.

Exposes one tool, search_contacts, over stdio.

Usage:
    python -m imessage_contacts.mcp_server.server
"""

import asyncio
import logging
from typing import Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp import types

from imessage_contacts import __version__
from imessage_contacts.core.config import Config, configure_logging
from imessage_contacts.contacts.errors import ContactSearchError
from imessage_contacts.contacts.search import ContactSearch
from imessage_contacts.mcp_server.handlers import SEARCH_CONTACTS_TOOL, handle_search_contacts
from imessage_contacts.mcp_server.responses import error_response

logger = logging.getLogger(__name__)

SERVER_NAME = "imessage-contacts"


def create_server(contacts: ContactSearch) -> Server:
    """Build the MCP server with its tool handlers bound to `contacts`."""
    app = Server(SERVER_NAME, version=__version__)

    @app.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        """List available MCP tools."""
        return [SEARCH_CONTACTS_TOOL]

    @app.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[types.TextContent]:
        """Dispatch an MCP tool call."""
        logger.info(f"Tool called: {name} with args: {arguments}")

        try:
            if name == "search_contacts":
                return await handle_search_contacts(arguments or {}, contacts)
            raise ValueError(f"Unknown tool: {name}")

        except Exception as e:
            logger.error(f"Error executing tool {name}: {e}", exc_info=True)
            return error_response(str(e))

    return app


def probe_contacts_access(contacts: ContactSearch) -> bool:
    """
    Run a test search so macOS shows its access prompt at startup.

    Returns:
        True if the search succeeded
    """
    logger.info("Testing contacts database integration...")
    try:
        result = contacts.search("test")
    except ContactSearchError as e:
        logger.error(f"Contacts integration test failed: {e}")
        logger.error("Contacts search may not work properly. Check macOS Contacts access permissions.")
        return False

    logger.info(
        f"Contacts integration successful. {len(contacts.sources)} source(s), "
        f"search test returned {len(result.data)} results."
    )
    return True


async def run(config: Optional[Config] = None) -> None:
    """Run the MCP server over stdio until the client disconnects."""
    config = config or Config()
    with ContactSearch(config) as contacts:
        probe_contacts_access(contacts)
        app = create_server(contacts)

        logger.info("Starting MCP server...")
        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream,
                write_stream,
                app.create_initialization_options()
            )


def main() -> None:
    config = Config()
    configure_logging(config, "mcp_server.log")
    asyncio.run(run(config))


if __name__ == "__main__":
    main()
