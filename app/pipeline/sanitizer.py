# =============================================================================
# app/pipeline/sanitizer.py - Input Sanitizer
# =============================================================================
# Trims and HTML-escapes every top-level string in the body and query before
# validators or handlers see it. Other value types pass through. Cannot fail.
# =============================================================================

import html
from typing import Any

from .context import CONTINUE, RequestContext, StageResult


def sanitize_value(value: str) -> str:
    """Strip surrounding whitespace and escape &, <, >, " and '."""
    return html.escape(value.strip(), quote=True)


def sanitize_mapping(data: dict[str, Any]) -> dict[str, Any]:
    """Sanitize string values of a mapping in place and return it."""
    for key, value in data.items():
        if isinstance(value, str):
            data[key] = sanitize_value(value)
    return data


async def sanitize(context: RequestContext) -> StageResult:
    sanitize_mapping(context.body)
    sanitize_mapping(context.query)
    return CONTINUE
