"""Response error extraction for load test observability.

Storefront API errors are always shaped ``{"error": {"field": ["msg", ...]}}``;
stock conflicts add ``product_id``, ``available`` and ``requested``.
"""

from __future__ import annotations


def extract_error_detail(response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    """
    try:
        body = response.json()
    except Exception:
        # Not JSON, return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    error = body.get("error", body.get("detail"))
    if isinstance(error, dict):
        parts = []
        for key, messages in error.items():
            if isinstance(messages, list):
                messages = "; ".join(str(m) for m in messages)
            parts.append(f"{key}: {messages}")
        detail = " | ".join(parts)
    elif error is not None:
        detail = str(error)
    else:
        detail = str(body)

    if "available" in body:
        detail += f" (available={body['available']}, requested={body.get('requested')})"
    return detail[:300]
