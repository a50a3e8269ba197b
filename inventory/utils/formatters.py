"""
Formatting helpers registered as Jinja filters.
"""
from typing import Optional, Union


def qty(value: Union[int, float, str, None]) -> str:
    """
    Format a stock quantity with thousands separators.

    Examples:
        qty(1500) -> "1,500"
        qty(8) -> "8"
        qty(None) -> "0"
    """
    if value is None or value == "":
        return "0"
    try:
        return f"{int(value):,}"
    except (TypeError, ValueError):
        return "0"


def or_dash(value: Optional[str]) -> str:
    """Return the value, or an em dash placeholder when it is empty."""
    if value is None:
        return "—"
    text = str(value).strip()
    return text if text else "—"
