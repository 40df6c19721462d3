"""Content negotiation helpers.

Everything here is pure: the functions infer, format and convert payloads
according to a MIME type and never touch a transport.
"""

import json
from typing import Any, Iterator, Mapping, Optional

from ._url import encode_component, encode_pairs
from .constants import (
    DEFAULT_CHARSET,
    MIME_FORM_URLENCODED,
    MIME_JSON,
    MIME_TEXT,
)


class FormData:
    """Ordered multipart form payload.

    Values may be text, numbers, bytes or a ``(filename, content[, content_type])``
    tuple for file parts.
    """

    def __init__(self, fields: Optional[Mapping[str, Any]] = None) -> None:
        self._fields: list[tuple[str, Any]] = []
        for name, value in (fields or {}).items():
            self.append(name, value)

    def append(self, name: str, value: Any) -> None:
        self._fields.append((name, value))

    def items(self) -> Iterator[tuple[str, Any]]:
        return iter(self._fields)

    def to_files(self) -> list[tuple[str, Any]]:
        """Convert the fields to the ``files`` argument of an httpx request.

        Plain values become file-less parts so httpx always encodes the
        payload as ``multipart/form-data``.
        """
        files: list[tuple[str, Any]] = []
        for name, value in self._fields:
            if isinstance(value, tuple):
                files.append((name, value))
            elif isinstance(value, (bytes, bytearray)):
                files.append((name, (None, bytes(value))))
            else:
                files.append((name, (None, str(value))))
        return files

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FormData({[name for name, _ in self._fields]!r})"


def is_structured(data: Any) -> bool:
    return isinstance(data, (Mapping, list, tuple))


def _as_text(data: Any) -> Any:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode(DEFAULT_CHARSET)
    return data


def _from_json(data: Any) -> Any:
    if isinstance(data, (str, bytes, bytearray)):
        return json.loads(data)
    return data


def _to_urlencoded(data: Any) -> str:
    if isinstance(data, Mapping):
        return encode_pairs(data)
    return encode_component(_as_text(data))


_CONVERTERS = {
    MIME_TEXT: lambda data: data,
    MIME_JSON: _from_json,
    MIME_FORM_URLENCODED: _to_urlencoded,
}


def mimeify(data: Any, mime_type: Optional[str]) -> Any:
    """Convert ``data`` according to ``mime_type``.

    Unknown MIME types leave the data untouched.

    Raises:
        ValueError: If ``data`` is declared as JSON but cannot be parsed.
    """
    converter = _CONVERTERS.get(mime_type or "")
    if converter is None:
        return data
    return converter(data)


def infer_type(body: Any) -> Optional[str]:
    """Content type implied by a body, or ``None`` when nothing can be assumed."""
    if isinstance(body, str):
        return MIME_TEXT if body else None
    if is_structured(body):
        return MIME_JSON
    return None


def format_content_type(mime_type: str, charset: str = DEFAULT_CHARSET) -> str:
    return f"{mime_type}; charset={charset}"


def parse_content_type(value: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """Split a ``Content-Type`` header into its MIME type and charset."""
    if not value:
        return None, None

    mime_type, *params = [part.strip() for part in value.split(";")]
    charset = None
    for param in params:
        key, _, param_value = param.partition("=")
        if key.strip().lower() == "charset":
            charset = param_value.strip().strip('"') or None
    return mime_type.lower() or None, charset


def serialize_body(
    body: Any, mime_type: Optional[str], charset: Optional[str] = None
) -> Optional[bytes]:
    """Encode an outbound body to bytes for the declared content type."""
    if body is None:
        return None
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)

    encoding = charset or DEFAULT_CHARSET
    if mime_type == MIME_FORM_URLENCODED:
        return mimeify(body, MIME_FORM_URLENCODED).encode(encoding)
    if is_structured(body):
        return json.dumps(body).encode(encoding)
    return str(body).encode(encoding)
