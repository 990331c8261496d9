import logging
from collections.abc import Sequence
from typing import Any

# Create the library logger
logger = logging.getLogger("pagedarray")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())

PREVIEW_ITEMS = 3


def summarize_items(items: Sequence[Any], limit: int = PREVIEW_ITEMS) -> str:
    """
    Renders a short preview of a page for log context.
    Only the first `limit` items are shown so large pages never flood the log.
    """
    try:
        head = ", ".join(repr(item) for item in items[:limit])
        if len(items) > limit:
            head += f", ... (+{len(items) - limit} more)"
        return f"[{head}]"
    except Exception:
        return "<preview_failed>"
