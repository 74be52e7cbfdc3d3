"""
Response formatting utilities for MCP tool handlers.
"""

import json
from typing import Any

from mcp import types


def text_response(text: str) -> list[types.TextContent]:
    """Create a simple text response."""
    return [types.TextContent(type="text", text=text)]


def json_response(payload: Any) -> list[types.TextContent]:
    """Create a pretty-printed JSON response."""
    return text_response(json.dumps(payload, indent=2, ensure_ascii=False))


def error_response(error: str, prefix: str = "Error") -> list[types.TextContent]:
    """
    Create a standardized error response.

    Args:
        error: Error message
        prefix: Prefix for the error (default: "Error")
    """
    return text_response(f"{prefix}: {error}")


def validation_error(error: str) -> list[types.TextContent]:
    """Create a validation error response."""
    return error_response(error, "Validation error")
