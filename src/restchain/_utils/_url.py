"""URL validation, joining and percent-encoding helpers."""

import re
from typing import Any, Mapping, Optional
from urllib.parse import quote

# Characters left untouched by percent-encoding, same set as encodeURIComponent
_UNRESERVED = "-_.!~*'()"

_IPV4 = r"(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)(?:\.(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)){3}"
_HOSTNAME = r"(?:[a-z0-9\u00a1-\uffff](?:[a-z0-9\u00a1-\uffff-]*[a-z0-9\u00a1-\uffff])?\.)+[a-z\u00a1-\uffff]{2,}\.?"

_URL_PATTERN = re.compile(
    r"^(?:[a-z][a-z0-9+.-]*:)?(?://)?"  # optional scheme
    r"(?:[^\s:@/]+(?::[^\s@/]*)?@)?"  # optional userinfo
    rf"(?:localhost|{_IPV4}|{_HOSTNAME})"
    r"(?::\d{1,5})?"  # port
    r"(?:[/?#][^\s\"]*)?$",
    re.IGNORECASE,
)


def is_valid_url(url: Any) -> bool:
    """Check that ``url`` looks like an absolute or host-relative URL.

    Accepts a scheme followed by a host, a bare host with an optional path,
    ``localhost`` or an IPv4 literal. Anything that is not a string fails.
    """
    if not isinstance(url, str) or not url:
        return False
    return _URL_PATTERN.match(url) is not None


def join_url(*parts: Optional[str]) -> str:
    """Join URL segments with exactly one slash between them.

    Empty segments are skipped. A leading slash on the first segment and a
    trailing slash on the last one are preserved.
    """
    segments = [str(p) for p in parts if p not in (None, "")]
    if not segments:
        return ""

    joined = segments[0].rstrip("/") if len(segments) > 1 else segments[0]
    for index, segment in enumerate(segments[1:], start=1):
        segment = segment.lstrip("/")
        if index < len(segments) - 1:
            segment = segment.rstrip("/")
        joined = f"{joined}/{segment}"
    return joined


def encode_component(value: Any) -> str:
    """Percent-encode a single key or value."""
    return quote(str(value), safe=_UNRESERVED)


def encode_pairs(params: Mapping[str, Any]) -> str:
    return "&".join(
        f"{encode_component(key)}={encode_component(value)}"
        for key, value in params.items()
    )


def encode_query(params: Optional[Mapping[str, Any]]) -> str:
    """Encode ``params`` as a query string with a single leading ``?``.

    Keys keep their insertion order. An empty or missing mapping gives ``"?"``.
    """
    if not params:
        return "?"
    return f"?{encode_pairs(params)}"
