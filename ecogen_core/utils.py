"""Utility functions for ecogen."""
import re

from .exceptions import ValidationError

# PM2 memory values: a number followed by K, M or G
MEMORY_PATTERN = re.compile(r'^(\d+)([KMG])$')


def validate_memory(memory: str) -> str:
    """Validate a PM2 memory ceiling string.

    Args:
        memory: Memory string like "500M", "1G", "262144K".

    Returns:
        The validated memory string, unit upper-cased.

    Raises:
        ValidationError: If the memory string is invalid.
    """
    if not memory or not memory.strip():
        raise ValidationError("max_memory_restart", "Memory ceiling cannot be empty")

    memory = memory.strip().upper()
    match = MEMORY_PATTERN.match(memory)

    if not match:
        raise ValidationError(
            "max_memory_restart",
            "Memory must be specified as a number followed by K, M or G (e.g., '500M', '1G')",
        )

    if int(match.group(1)) == 0:
        raise ValidationError("max_memory_restart", "Memory ceiling must be greater than zero")

    return memory
