from typing import Optional


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Strip ``value``; empty or whitespace-only text becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None
