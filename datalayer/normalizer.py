"""
String normalization for analytics taxonomy values.
"""

import re
from typing import Any

_WHITESPACE = re.compile(r"\s+")


def normalize(text: Any) -> str:
    """Lowercase, trim and hyphenate a free-text value.

    ``"  Test | String "`` becomes ``"test---string"`` and
    ``"Air Max  90"`` becomes ``"air-max-90"``. Empty input gives ``""``.
    """
    if not text:
        return ""

    cleaned = str(text).lower().strip()
    cleaned = cleaned.replace("|", "-")
    return _WHITESPACE.sub("-", cleaned)
