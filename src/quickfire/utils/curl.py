"""
Render a wire request as an equivalent curl command for debugging.
"""

import shlex
from typing import List, Optional

from ..core.transport import WireRequest
from .sanitizer import mask_headers, mask_string


def to_curl(request: WireRequest, body: Optional[bytes] = None) -> str:
    """
    Build a copy-pasteable curl command.

    Sensitive headers are masked. The body is included only when it is
    valid UTF-8; binary bodies are summarized instead.

    Args:
        request: Request to render
        body: Body override (defaults to request.body)

    Example:
        >>> to_curl(WireRequest("GET", "https://api.example.com/x/", {"Accept": "*/*"}))
        "curl -X GET -H 'Accept: */*' https://api.example.com/x/"
    """
    if body is None:
        body = request.body

    parts: List[str] = ["curl", "-X", request.method.upper()]

    for name, value in mask_headers(request.headers).items():
        parts.extend(["-H", shlex.quote(f"{name}: {value}")])

    if body:
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError:
            parts.append(f"--data-binary '<{len(body)} bytes>'")
        else:
            parts.extend(["-d", shlex.quote(mask_string(text))])

    parts.append(shlex.quote(request.url))
    return " ".join(parts)
