"""
Helpers for showing secrets without revealing them.
"""

import re


def mask_sensitive_value(value: str, show_last: int = 4) -> str:
    """
    Mask sensitive values for display, showing only the last few characters.

    Args:
        value: The sensitive value to mask
        show_last: Number of characters to show at the end

    Returns:
        Masked string with asterisks
    """
    if not value or len(value) <= show_last:
        return value
    return "*" * (len(value) - show_last) + value[-show_last:]


def mask_connection_string(connection_string: str) -> str:
    """Replace the password of a postgresql:// URL with asterisks."""
    return re.sub(r"(postgres(?:ql)?://[^:/@]+:)[^@]+@", r"\1****@", connection_string)
