"""
Contact search tool handlers.

- search_contacts: find contacts by name and return their iMessage handles
"""

import logging

from mcp import types

from imessage_contacts.contacts.errors import ContactSearchError
from imessage_contacts.contacts.search import ContactSearch
from imessage_contacts.mcp_server.errors import handle_search_error
from imessage_contacts.mcp_server.responses import json_response, validation_error
from imessage_contacts.mcp_server.validation import (
    validate_limit,
    validate_non_empty_string,
    validate_offset,
    validate_optional_string,
)

logger = logging.getLogger(__name__)

SEARCH_CONTACTS_TOOL = types.Tool(
    name="search_contacts",
    description=(
        "Search for contacts by first name and optional last name. "
        "Use this FIRST when looking for messages from a specific person - it returns "
        "the phone number or email that can be used as the 'handle' parameter when "
        "searching messages. If lastName is omitted, searches across all name fields. "
        "Results are paginated: check 'hasMore' and use 'offset' until hasMore=false."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "firstName": {
                "type": "string",
                "minLength": 1,
                "description": "First name to search for (e.g., 'John')"
            },
            "lastName": {
                "type": "string",
                "description": "Last name to search for (e.g., 'Smith'). Optional."
            },
            "limit": {
                "type": "number",
                "minimum": 1,
                "maximum": 200,
                "default": 50,
                "description": "Maximum number of contacts to return (1-200, default: 50)"
            },
            "offset": {
                "type": "number",
                "minimum": 0,
                "default": 0,
                "description": "Number of contacts to skip for pagination (default: 0)"
            }
        },
        "required": ["firstName"]
    }
)


async def handle_search_contacts(
    arguments: dict,
    contacts: ContactSearch
) -> list[types.TextContent]:
    """
    Handle search_contacts tool call.

    Args:
        arguments: {"firstName": str, "lastName": str (optional),
                    "limit": int (optional), "offset": int (optional)}
        contacts: ContactSearch instance

    Returns:
        JSON search result, or a validation/search error message
    """
    first_name, error = validate_non_empty_string(arguments.get("firstName"), "firstName")
    if error:
        return validation_error(error)

    last_name, error = validate_optional_string(arguments.get("lastName"), "lastName")
    if error:
        return validation_error(error)

    config = contacts.config
    limit, error = validate_limit(
        arguments,
        default=config.get("default_limit", 50),
        min_val=config.get("min_limit", 1),
        max_val=config.get("max_limit", 200),
    )
    if error:
        return validation_error(error)

    offset, error = validate_offset(arguments)
    if error:
        return validation_error(error)

    try:
        result = contacts.search(first_name, last_name, limit=limit, offset=offset)
    except ContactSearchError as e:
        return handle_search_error(e)

    query = " ".join(part for part in (first_name, last_name) if part)
    logger.info(f"search_contacts '{query}' returned {len(result.data)} of {result.pagination.total}")
    return json_response(result.to_dict())
