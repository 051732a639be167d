"""
analytics/palette.py

Stable label-to-color assignment for chart series and slices.

Well-known labels (severities, priorities, statuses, sources) use a fixed
table. Any other label is hashed with SHA-1 into ``FALLBACK_PALETTE`` so the
same label gets the same color in every process.
"""

from __future__ import annotations

import hashlib
from typing import Final, Iterable

KNOWN_COLORS: Final[dict[str, str]] = {
    "critical": "rgba(239, 68, 68, 0.8)",
    "high": "rgba(245, 158, 11, 0.8)",
    "medium": "rgba(234, 179, 8, 0.8)",
    "low": "rgba(16, 185, 129, 0.8)",
    "p1": "rgba(79, 70, 229, 0.8)",
    "p2": "rgba(139, 92, 246, 0.8)",
    "p3": "rgba(167, 139, 250, 0.8)",
    "p4": "rgba(196, 181, 253, 0.8)",
    "open": "#FF6384",
    "in progress": "#36A2EB",
    "resolved": "#4BC0C0",
    "closed": "#97BBCD",
    "rally": "rgba(0, 122, 255, 0.8)",
    "jira": "rgba(88, 86, 214, 0.8)",
    "servicenow": "rgba(52, 199, 89, 0.8)",
    "unknown": "rgba(107, 114, 128, 0.8)",
    "failures": "rgba(59, 130, 246, 0.8)",
}

FALLBACK_PALETTE: Final[tuple[str, ...]] = (
    "#FF6384",
    "#36A2EB",
    "#FFCE56",
    "#4BC0C0",
    "#9966FF",
    "#FF9F40",
    "#C9CBCF",
    "#7BC043",
    "#F37736",
    "#0392CF",
)


def color_for(label: str) -> str:
    """
    Return the color for *label*; a pure function of the label string.
    """

    key = (label or "").strip().lower()
    known = KNOWN_COLORS.get(key)
    if known is not None:
        return known

    digest = hashlib.sha1(key.encode("utf-8")).digest()
    index = int.from_bytes(digest[:4], "big") % len(FALLBACK_PALETTE)
    return FALLBACK_PALETTE[index]


def colors_for(labels: Iterable[str]) -> list[str]:
    return [color_for(label) for label in labels]
