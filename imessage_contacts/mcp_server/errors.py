"""
Error handling for contact search tool calls.

Permission failures get actionable Contacts access instructions.
"""

import logging

from mcp import types

from imessage_contacts.mcp_server.responses import text_response

logger = logging.getLogger(__name__)

PERMISSION_ERROR_PATTERNS = [
    "unable to open database",
    "permission denied",
    "operation not permitted",
    "access denied",
    "authorization denied",
]

CONTACTS_ACCESS_HELP = """
To grant Contacts access:

1. Open System Settings
2. Go to Privacy & Security → Full Disk Access (or Contacts)
3. Add the app running this server (Terminal, your IDE, ...)
4. Toggle it ON and restart the app

AddressBook databases are protected by macOS privacy controls.
"""


def is_permission_error(error: Exception) -> bool:
    """Check if an error looks like a permission/access error."""
    error_str = str(error).lower()
    return any(pattern in error_str for pattern in PERMISSION_ERROR_PATTERNS)


def handle_search_error(e: Exception) -> list[types.TextContent]:
    """
    Format a contact search failure for the tool caller.

    Args:
        e: The exception that was raised

    Returns:
        Error response, with access instructions for permission failures
    """
    error_msg = f"Error searching contacts: {e}"
    logger.error(error_msg, exc_info=True)

    if is_permission_error(e):
        return text_response(f"{error_msg}\n{CONTACTS_ACCESS_HELP}")

    return text_response(error_msg)
