"""Turn budget wind-down.

The driver owns the turn count; this module only decides when to nudge and
what to say.
"""

NUDGE_THRESHOLD = 2

NUDGE_TEXT = (
    "You are running low on turns. Please stop calling tools and produce "
    "your final JSON result now."
)


def should_nudge(turns_remaining: int) -> bool:
    """Return True once two or fewer turns remain."""
    return turns_remaining <= NUDGE_THRESHOLD


def nudge_text() -> str:
    return NUDGE_TEXT
