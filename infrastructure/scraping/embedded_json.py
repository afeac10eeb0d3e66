"""Pull a JSON object literal out of inline ``<script>`` text.

Pages assign their server-rendered state to a global
(``window.__SSR_DATA__ = {...};``) followed by more script. The object is
nested, so the closing brace is found by counting depth character by
character rather than with a regular expression, which would stop at the
first inner ``}``.
"""
import json
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

SSR_MARKER = "window.__SSR_DATA__ ="


def find_balanced_object(text: str, start: int = 0) -> Optional[str]:
    """Return the ``{...}`` substring opening at the first ``{`` at/after ``start``.

    Braces inside double-quoted string literals are ignored. Returns None if
    there is no opening brace or the depth never returns to zero.
    """
    open_at = text.find("{", start)
    if open_at == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(open_at, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[open_at:i + 1]
    return None


def extract_assigned_object(text: str, marker: str = SSR_MARKER) -> Optional[dict[str, Any]]:
    """Parse the object assigned right after ``marker``; None when absent or invalid."""
    if not text:
        return None
    idx = text.find(marker)
    if idx == -1:
        logger.debug(f"Marker {marker!r} not found")
        return None

    raw = find_balanced_object(text, idx + len(marker))
    if raw is None:
        logger.warning(f"Unbalanced object after {marker!r}")
        return None

    try:
        value = json.loads(raw)
    except ValueError as exc:
        logger.warning(f"Embedded JSON parse error: {exc}")
        return None
    logger.debug(f"Embedded JSON length: {len(raw)}")
    return value if isinstance(value, dict) else None
