"""
Validation utilities for MCP tool arguments.

Every validator returns a (value, error) tuple; error is None when valid.
"""

from typing import Optional

MIN_LIMIT = 1
MAX_LIMIT = 200


def validate_positive_int(
    value,
    name: str,
    min_val: int = MIN_LIMIT,
    max_val: Optional[int] = MAX_LIMIT
) -> tuple[int | None, str | None]:
    """
    Validate that a value is an integer within bounds.

    Args:
        value: Value to validate
        name: Parameter name for error messages
        min_val: Minimum allowed value
        max_val: Maximum allowed value, or None for no upper bound

    Returns:
        Tuple of (validated_value, error_message). If valid, error_message is None.
    """
    if value is None:
        return None, None

    if isinstance(value, bool):
        return None, f"Invalid {name}: must be an integer, got bool"

    try:
        int_value = int(value)
    except (TypeError, ValueError):
        return None, f"Invalid {name}: must be an integer, got {type(value).__name__}"

    if int_value < min_val:
        return None, f"Invalid {name}: must be at least {min_val}, got {int_value}"

    if max_val is not None and int_value > max_val:
        return None, f"Invalid {name}: must be at most {max_val}, got {int_value}"

    return int_value, None


def validate_non_empty_string(value, name: str) -> tuple[str | None, str | None]:
    """
    Validate that a value is a non-empty string.

    Returns:
        Tuple of (validated_value, error_message). The value is stripped.
    """
    if value is None:
        return None, f"Missing required parameter: {name}"

    if not isinstance(value, str):
        return None, f"Invalid {name}: must be a string, got {type(value).__name__}"

    stripped = value.strip()
    if not stripped:
        return None, f"Invalid {name}: cannot be empty"

    return stripped, None


def validate_optional_string(value, name: str) -> tuple[str | None, str | None]:
    """Validate an optional string; blank strings are treated as absent."""
    if value is None:
        return None, None

    if not isinstance(value, str):
        return None, f"Invalid {name}: must be a string, got {type(value).__name__}"

    return value.strip() or None, None


def validate_limit(
    arguments: dict,
    default: int = 50,
    min_val: int = MIN_LIMIT,
    max_val: int = MAX_LIMIT
) -> tuple[int, str | None]:
    """Extract and validate 'limit' from an arguments dict."""
    limit_raw = arguments.get("limit", default)
    limit, error = validate_positive_int(limit_raw, "limit", min_val=min_val, max_val=max_val)
    if error:
        return default, error
    return limit if limit is not None else default, None


def validate_offset(arguments: dict) -> tuple[int, str | None]:
    """Extract and validate 'offset' from an arguments dict (default 0)."""
    offset, error = validate_positive_int(arguments.get("offset", 0), "offset", min_val=0, max_val=None)
    if error:
        return 0, error
    return offset if offset is not None else 0, None
