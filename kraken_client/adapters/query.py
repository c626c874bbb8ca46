"""Query string helpers for Twitch API URLs."""

import math
from typing import Mapping, Optional, Union
from urllib.parse import quote

QueryValue = Union[str, int, float, bool]

# Characters left unescaped in addition to quote()'s defaults, matching
# the URI component rules the API documents its examples with.
_COMPONENT_SAFE = "!~*'()"


def format_value(value: Optional[QueryValue]) -> str:
    """Render a query value the way the API's JavaScript clients do.

    Booleans become ``true``/``false``, ``None`` becomes ``null`` and
    whole floats drop their decimal part.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def encode_component(value: Optional[QueryValue]) -> str:
    """Percent-encode a single URL component."""
    return quote(format_value(value), safe=_COMPONENT_SAFE)


def build_query_string(options: Optional[Mapping[str, QueryValue]]) -> str:
    """Build a query string from a parameter mapping.

    Keys and values are percent-encoded and kept in the mapping's iteration
    order. The result starts with ``?``; an empty or missing mapping yields
    an empty string.

    Args:
        options: Query parameters

    Returns:
        str: Query string ready to append to a URL
    """
    if not options:
        return ""

    pairs = [
        f"{encode_component(key)}={encode_component(value)}"
        for key, value in options.items()
    ]
    return "?" + "&".join(pairs)
