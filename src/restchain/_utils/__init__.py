from ._negotiation import (
    FormData,
    format_content_type,
    infer_type,
    mimeify,
    parse_content_type,
    serialize_body,
)
from ._url import encode_component, encode_query, is_valid_url, join_url

__all__ = [
    "FormData",
    "format_content_type",
    "infer_type",
    "mimeify",
    "parse_content_type",
    "serialize_body",
    "encode_component",
    "encode_query",
    "is_valid_url",
    "join_url",
]
