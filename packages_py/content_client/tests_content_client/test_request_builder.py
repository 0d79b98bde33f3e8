"""
Tests for request_builder.py
Logic testing: Decision/Branch, Boundary Value, Path coverage
"""
import base64
import json

import pytest

from content_client.auth.auth_handler import create_auth_handler
from content_client.config import AuthConfig, ClientConfig, resolve_config
from content_client.core import request_builder
from content_client.core.request_builder import (
    EncodedBody,
    build_body,
    build_headers,
    build_url,
    create_request_context,
    prepare_request,
)
from content_client.errors import UnsupportedContentType
from content_client.types import FileBody, StructuredBody, TextBody


def basic(user, password):
    return "Basic " + base64.b64encode(f"{user}:{password}".encode()).decode()


class TestBuildUrl:
    """Tests for build_url function."""

    # Path: plain concatenation
    def test_concatenates(self):
        assert build_url("http://localhost:8080", "/users") == "http://localhost:8080/users"

    # Boundary: no normalization of slashes
    def test_no_normalization(self):
        assert build_url("http://localhost/", "/users") == "http://localhost//users"
        assert build_url("http://localhost", "users") == "http://localhostusers"

    # Boundary: empty base (default client passes full URLs)
    def test_empty_base(self):
        assert build_url("", "http://example.com/a") == "http://example.com/a"

    # Boundary: empty path
    def test_empty_path(self):
        assert build_url("http://localhost", "") == "http://localhost"


class TestBuildBody:
    """Tests for build_body function."""

    # Decision: no body
    def test_absent(self):
        assert build_body(None, None, "application/json") == EncodedBody(content=None)

    # Decision: structured body, default content type
    def test_structured_default_type(self):
        encoded = build_body(StructuredBody({"key": "value"}), None, "application/json")
        assert encoded.content_type == "application/json"
        assert json.loads(encoded.content) == {"key": "value"}

    # Decision: structured body, explicit content type overrides default
    def test_structured_explicit_type(self):
        encoded = build_body(
            StructuredBody({"key": "value"}), "application/x-www-form-urlencoded", "application/json"
        )
        assert encoded.content_type == "application/x-www-form-urlencoded"
        assert encoded.content == b"key=value"

    # Error Path: structured body without codec
    def test_structured_unsupported(self):
        with pytest.raises(UnsupportedContentType):
            build_body(StructuredBody({"a": "b"}), "application/octet-stream", "application/json")

    # Decision: text body sent verbatim, no forced content type
    def test_text(self):
        encoded = build_body(TextBody("text ñ"), None, "application/json")
        assert encoded.content == "text ñ".encode("utf-8")
        assert encoded.content_type is None

    # Decision: text body with caller content type
    def test_text_with_type(self):
        encoded = build_body(TextBody("<a/>"), "application/xml", "application/json")
        assert encoded.content_type == "application/xml"

    # Decision: file body becomes base64 text
    def test_file(self, tmp_path):
        path = tmp_path / "data.bin"
        raw = bytes(range(256))
        path.write_bytes(raw)

        encoded = build_body(FileBody(path), None, "application/json")

        assert encoded.content == base64.b64encode(raw)
        assert base64.b64decode(encoded.content) == raw
        encoded.content.decode("ascii")
        assert encoded.content_type is None

    # Boundary: empty file
    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_bytes(b"")
        assert build_body(FileBody(path), None, "application/json").content == b""

    # Error Path: missing file surfaces the OS error
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            build_body(FileBody(tmp_path / "missing"), None, "application/json")


class TestBuildHeaders:
    """Tests for build_headers function."""

    @pytest.fixture
    def context(self):
        return create_request_context("GET", "http://localhost/")

    # Path: defaults and call headers merged, call wins
    def test_merge(self, context):
        config = resolve_config(ClientConfig(headers={"User-Agent": "Test", "X-A": ["1", "2"]}))
        result = build_headers(config, {"x-a": "3"}, None, context)

        assert result["User-Agent"] == ["Test"]
        assert result["x-a"] == ["3"]
        assert "X-A" not in result

    # Decision: structured content type replaces any other Content-Type
    def test_content_type_replaced(self, context):
        config = resolve_config(ClientConfig(headers={"content-type": "text/plain"}))
        encoded = EncodedBody(content=b"{}", content_type="application/json")

        result = build_headers(config, {"Content-Type": "text/html"}, encoded, context)

        assert result == {"Content-Type": ["application/json"]}

    # Decision: no body keeps caller Content-Type untouched
    def test_content_type_kept_without_structured(self, context):
        config = resolve_config(ClientConfig())
        result = build_headers(config, {"Content-Type": "text/html"}, EncodedBody(b"x"), context)
        assert result == {"Content-Type": ["text/html"]}

    # Decision: basic auth attached
    def test_basic_auth(self, context):
        config = resolve_config(ClientConfig(auth=AuthConfig.basic("user", "password")))
        handler = create_auth_handler(config.auth)

        result = build_headers(config, None, None, context, handler)

        assert result["Authorization"] == [basic("user", "password")]

    # Decision: caller Authorization wins over configured auth
    def test_caller_authorization_wins(self, context):
        config = resolve_config(ClientConfig(auth=AuthConfig.basic("user", "password")))
        handler = create_auth_handler(config.auth)

        result = build_headers(config, {"authorization": "Bearer mine"}, None, context, handler)

        assert result == {"authorization": ["Bearer mine"]}

    # Decision: no auth handler
    def test_no_auth(self, context):
        config = resolve_config(ClientConfig())
        assert build_headers(config, None, None, context, None) == {}


class TestPrepareRequest:
    """Tests for prepare_request function."""

    @pytest.fixture
    def config(self):
        return resolve_config(
            ClientConfig(
                base_url="http://localhost:8080",
                headers={"header1": ["val1", "val2"]},
                auth=AuthConfig.basic("user", "password"),
            )
        )

    @pytest.fixture
    def handler(self, config):
        return create_auth_handler(config.auth)

    # Path: GET without body
    def test_get_no_body(self, config, handler):
        prepared = prepare_request(config, "GET", "/auth", auth_handler=handler)

        assert prepared.method == "GET"
        assert prepared.url == "http://localhost:8080/auth"
        assert prepared.body is None
        assert "Content-Type" not in prepared.headers
        assert prepared.headers["header1"] == ["val1", "val2"]
        assert prepared.headers["Authorization"] == [basic("user", "password")]

    # Path: mapping resolved to structured body
    def test_mapping_body(self, config, handler):
        prepared = prepare_request(config, "POST", "/", body={"foo": "fighters"})
        assert prepared.headers["Content-Type"] == ["application/json"]
        assert json.loads(prepared.body) == {"foo": "fighters"}

    # Path: str resolved to text body
    def test_str_body(self, config):
        prepared = prepare_request(config, "POST", "/string", body="text")
        assert prepared.body == b"text"
        assert "Content-Type" not in prepared.headers

    # Path: path resolved to file body
    def test_path_body(self, config, tmp_path):
        path = tmp_path / "f.xml"
        path.write_text("<configuration/>")
        prepared = prepare_request(config, "POST", "/file", body=path)
        assert base64.b64decode(prepared.body) == b"<configuration/>"

    # Error Path: unsupported body type
    def test_bad_body_type(self, config):
        with pytest.raises(TypeError, match="Unsupported body type"):
            prepare_request(config, "POST", "/", body=12)

    # Error Path: raised during assembly, before dispatch
    def test_unsupported_content_type(self, config):
        with pytest.raises(UnsupportedContentType):
            prepare_request(config, "POST", "/", body={"a": "b"}, content_type="image/png")

    # Path: prepared request does not share default header lists
    def test_defaults_not_shared(self, config):
        prepared = prepare_request(config, "GET", "/")
        prepared.headers["header1"].append("val3")
        assert config.headers["header1"] == ["val1", "val2"]

    # Path: headers assembled through build_headers
    def test_routes_through_build_headers(self, config, handler, monkeypatch):
        calls = []

        def spy(*args):
            calls.append(args)
            return build_headers(*args)

        monkeypatch.setattr(request_builder, "build_headers", spy)
        prepared = prepare_request(
            config, "POST", "/", body={"a": "b"}, headers={"X-Call": "1"}, auth_handler=handler
        )

        assert len(calls) == 1
        call_config, call_headers, encoded, context, auth_handler = calls[0]
        assert call_config is config
        assert call_headers == {"X-Call": "1"}
        assert encoded.content_type == "application/json"
        assert context.url == "http://localhost:8080/"
        assert auth_handler is handler
        assert prepared.headers["X-Call"] == ["1"]
