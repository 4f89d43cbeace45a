"""Relative-time label parsing ("15m ago", "2h ago", "1d ago").

Upstream records carry a human-readable age instead of a timestamp, so
freshness is derived from the label text.
"""

import re

DEFAULT_FRESHNESS_MINUTES = 60

# Whitespace as the search UI defines it: no \x1c-\x1f separators, plus BOM.
WHITESPACE_CLASS = "[ \\t\\n\\r\\f\\v\\u00a0\\u1680\\u2000-\\u200a\\u2028\\u2029\\u202f\\u205f\\u3000\\ufeff]"

_AGO_RE = re.compile(r"ago", re.IGNORECASE)
_LABEL_RE = re.compile(rf"([0-9]+){WHITESPACE_CLASS}*(m|h|d)", re.IGNORECASE)

_UNIT_MINUTES = {"m": 1, "h": 60, "d": 60 * 24}


def relative_label_to_minutes(label: str, default: int = DEFAULT_FRESHNESS_MINUTES) -> int:
    """Convert a relative-time label to minutes.

    The first ``<amount><unit>`` pair wins, whitespace between the two is
    allowed ("2 hours ago" reads as 2h). Anything without such a pair falls
    back to ``default``.
    """
    sanitized = _AGO_RE.sub("", label or "", count=1).strip()
    match = _LABEL_RE.search(sanitized)
    if not match:
        return default
    amount = int(match.group(1))
    return amount * _UNIT_MINUTES[match.group(2).lower()]
