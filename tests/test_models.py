"""Tests for the request option models and the operation table."""

from __future__ import annotations

import pydantic
import pytest

from snapapi import (
    EXTRACT_FORMATS,
    OPERATIONS,
    BatchOptions,
    PdfOptions,
    ScreenshotOptions,
    SnapAPIValidationError,
)
from snapapi._base import BINARY, JSON, _build_body, _decode_content, _extract_error


# ---------------------------------------------------------------------------
# Option models
# ---------------------------------------------------------------------------

class TestOptionModels:

    def test_wire_names(self):
        opts = ScreenshotOptions(
            url="https://example.com",
            full_page=True,
            wait_for_selector="#main",
            block_cookie_banners=True,
            response_type="json",
        )
        assert opts.to_body() == {
            "url": "https://example.com",
            "fullPage": True,
            "waitForSelector": "#main",
            "blockCookieBanners": True,
            "responseType": "json",
        }

    def test_accepts_wire_names_on_input(self):
        opts = ScreenshotOptions.model_validate({"url": "https://e.com", "darkMode": True})
        assert opts.dark_mode is True

    def test_unknown_keys_pass_through(self):
        opts = BatchOptions.model_validate({"urls": ["https://e.com"], "futureOption": {"x": 1}})
        assert opts.to_body() == {"urls": ["https://e.com"], "futureOption": {"x": 1}}

    def test_nested_models(self):
        opts = PdfOptions(url="https://e.com", pdf_options={"margin_top": "20mm", "printBackground": True})
        assert opts.to_body()["pdfOptions"] == {"marginTop": "20mm", "printBackground": True}

    def test_thumbnail_and_cookies(self):
        opts = ScreenshotOptions(
            url="https://e.com",
            thumbnail={"enabled": True, "width": 200, "height": 150},
            cookies=[{"name": "session", "value": "abc", "domain": ".e.com"}],
        )
        body = opts.to_body()
        assert body["thumbnail"] == {"enabled": True, "width": 200, "height": 150}
        assert body["cookies"] == [{"name": "session", "value": "abc", "domain": ".e.com"}]

    def test_invalid_response_type(self):
        with pytest.raises(pydantic.ValidationError):
            ScreenshotOptions(url="https://e.com", response_type="xml")


# ---------------------------------------------------------------------------
# Operation table
# ---------------------------------------------------------------------------

class TestOperationTable:

    def test_binary_operations(self):
        binary = sorted(name for name, op in OPERATIONS.items() if op.result == BINARY)
        assert binary == ["pdf", "screenshot", "video"]

    def test_status_operations_are_get(self):
        for name in ("batch_status", "screenshot_status", "usage", "devices", "capabilities", "ping"):
            assert OPERATIONS[name].method == "GET"
            assert OPERATIONS[name].options is None

    def test_extract_helpers_override_format(self):
        for fmt in EXTRACT_FORMATS:
            op = OPERATIONS[f"extract_{fmt}"]
            assert op.path == "/v1/extract"
            assert op.overrides == {"format": fmt}

    def test_build_body_applies_overrides_last(self):
        body = _build_body(OPERATIONS["screenshot_async"], {"url": "https://e.com", "async": False}, {})
        assert body == {"url": "https://e.com", "async": True}

    def test_build_body_get_operation(self):
        assert _build_body(OPERATIONS["usage"], None, {}) is None

    def test_build_body_missing_url(self):
        with pytest.raises(SnapAPIValidationError, match="'url' is required"):
            _build_body(OPERATIONS["video"], {"duration": 3}, {})

    def test_build_body_does_not_mutate_input(self):
        options = {"url": "https://e.com"}
        _build_body(OPERATIONS["extract_article"], options, {"selector": "main"})
        assert options == {"url": "https://e.com"}

    def test_build_body_mapping_verbatim(self):
        options = {"url": "https://e.com", "full_page": True, "width": "800", "css": None}
        assert _build_body(OPERATIONS["screenshot"], options, {}) == options

    def test_build_body_renames_nested_kwargs(self):
        body = _build_body(
            OPERATIONS["screenshot"],
            {"url": "https://e.com"},
            {"thumbnail": {"enabled": True}, "cookies": [{"name": "a", "value": "b", "domain": None}]},
        )
        assert body == {"url": "https://e.com", "thumbnail": {"enabled": True}, "cookies": [{"name": "a", "value": "b"}]}

    def test_build_body_rejects_bad_response_type_in_mapping(self):
        with pytest.raises(SnapAPIValidationError, match="responseType"):
            _build_body(OPERATIONS["pdf"], {"url": "https://e.com", "responseType": "xml"}, {})


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------

class TestResponseHelpers:

    def test_decode_binary(self):
        op = OPERATIONS["pdf"]
        assert _decode_content(op, {"url": "x"}, b"%PDF", 200) == b"%PDF"

    def test_decode_json_operation_ignores_response_type(self):
        op = OPERATIONS["extract"]
        assert _decode_content(op, {"responseType": "binary"}, b'{"a": 1}', 200) == {"a": 1}

    def test_decode_json_response_type(self):
        op = OPERATIONS["screenshot"]
        assert op.result == BINARY
        assert _decode_content(op, {"responseType": "json"}, b"[1, 2]", 200) == [1, 2]
        assert OPERATIONS["batch"].result == JSON

    def test_extract_error_full(self):
        err = _extract_error(422, b'{"error": {"message": "m", "code": "C", "details": {"k": "v"}}}')
        assert (err.message, err.code, err.status_code, err.details) == ("m", "C", 422, {"k": "v"})

    def test_extract_error_non_dict_details_dropped(self):
        err = _extract_error(400, b'{"error": {"message": "m", "details": ["a"]}}')
        assert err.details is None
        assert err.code == "HTTP_ERROR"

    def test_extract_error_json_array_body(self):
        err = _extract_error(500, b"[]")
        assert (err.message, err.code) == ("HTTP 500", "HTTP_ERROR")
