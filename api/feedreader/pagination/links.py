"""Link header construction for paginated responses."""

from typing import Any, Dict, Optional
from urllib.parse import urlencode

from .cursor import Cursor


def create_link_header(
    base_url: str,
    params: Dict[str, Any],
    cursor: Cursor
) -> Optional[str]:
    """Create Link header for pagination as per RFC 8288.

    Args:
        base_url: Base URL for the resource
        params: Query parameters to carry over (cursor is replaced)
        cursor: Cursor of the page being returned

    Returns:
        Link header value or None if there is nowhere to go
    """
    links = []

    if cursor.has_next and cursor.next:
        next_params = {**params, "cursor": cursor.next}
        links.append(f'<{base_url}?{urlencode(next_params)}>; rel="next"')

    if cursor.has_prev and cursor.prev:
        prev_params = {**params, "cursor": cursor.prev}
        links.append(f'<{base_url}?{urlencode(prev_params)}>; rel="prev"')

    return ", ".join(links) if links else None
