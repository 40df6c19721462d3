import json

import pytest

from restchain._utils import (
    FormData,
    format_content_type,
    infer_type,
    mimeify,
    parse_content_type,
    serialize_body,
)


class TestMimeify:
    def test_text_passes_through(self):
        assert mimeify("hello", "text/plain") == "hello"

    def test_text_with_structured_input_passes_through(self):
        data = {"a": 1}
        assert mimeify(data, "text/plain") is data

    def test_json_parses_text(self):
        assert mimeify('{"a": [1, 2]}', "application/json") == {"a": [1, 2]}

    def test_json_parses_bytes(self):
        assert mimeify(b'{"a": 1}', "application/json") == {"a": 1}

    def test_json_passes_structured_through(self):
        data = {"a": 1}
        assert mimeify(data, "application/json") is data

    def test_json_rejects_malformed_text(self):
        with pytest.raises(ValueError):
            mimeify("{not json", "application/json")

    def test_urlencoded_encodes_raw_value(self):
        assert mimeify("a b&c", "application/x-www-form-urlencoded") == "a%20b%26c"

    def test_urlencoded_encodes_mapping_as_pairs(self):
        assert (
            mimeify({"a": 1, "b": "x y"}, "application/x-www-form-urlencoded")
            == "a=1&b=x%20y"
        )

    @pytest.mark.parametrize("mime_type", ["image/png", "", None])
    def test_unknown_type_is_a_passthrough(self, mime_type):
        data = object()
        assert mimeify(data, mime_type) is data


class TestInferType:
    def test_mapping_is_json(self):
        assert infer_type({"a": 1}) == "application/json"

    def test_list_is_json(self):
        assert infer_type([1, 2]) == "application/json"

    def test_string_is_text(self):
        assert infer_type("x") == "text/plain"

    @pytest.mark.parametrize("body", [None, "", b"raw", 3, FormData()])
    def test_nothing_assumed(self, body):
        assert infer_type(body) is None


class TestContentTypeHeader:
    def test_format(self):
        assert format_content_type("text/plain", "UTF-8") == "text/plain; charset=UTF-8"

    def test_parse_with_charset(self):
        assert parse_content_type("Application/JSON; charset=\"utf-8\"") == (
            "application/json",
            "utf-8",
        )

    def test_parse_without_charset(self):
        assert parse_content_type("text/html") == ("text/html", None)

    def test_parse_missing(self):
        assert parse_content_type(None) == (None, None)


class TestSerializeBody:
    def test_structured_body_is_json(self):
        assert json.loads(serialize_body({"a": 1}, "application/json")) == {"a": 1}

    def test_text_uses_charset(self):
        assert serialize_body("é", "text/plain", "latin-1") == b"\xe9"

    def test_mapping_as_urlencoded(self):
        assert (
            serialize_body({"a": "b c"}, "application/x-www-form-urlencoded")
            == b"a=b%20c"
        )

    def test_bytes_pass_through(self):
        assert serialize_body(b"\x00\x01", "application/octet-stream") == b"\x00\x01"

    def test_none_has_no_content(self):
        assert serialize_body(None, "application/json") is None


class TestFormData:
    def test_keeps_field_order(self):
        form = FormData({"b": 1, "a": 2})
        form.append("c", 3)

        assert [name for name, _ in form.items()] == ["b", "a", "c"]
        assert len(form) == 3

    def test_to_files(self):
        form = FormData(
            {
                "name": "Ada",
                "age": 36,
                "avatar": ("ada.png", b"\x89PNG", "image/png"),
                "raw": b"bytes",
            }
        )

        assert form.to_files() == [
            ("name", (None, "Ada")),
            ("age", (None, "36")),
            ("avatar", ("ada.png", b"\x89PNG", "image/png")),
            ("raw", (None, b"bytes")),
        ]
