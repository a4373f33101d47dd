"""Synchronous SnapAPI client (uses httpx)."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import httpx

from snapapi._base import (
    OPERATIONS,
    OptionsInput,
    _build_body,
    _build_headers,
    _build_path,
    _decode_content,
    _extract_error,
)
from snapapi.config import ClientConfig
from snapapi.exceptions import SnapAPIConnectionError, SnapAPITimeoutError, SnapAPIValidationError

logger = logging.getLogger(__name__)


class SnapAPI:
    """Synchronous Python client for the SnapAPI service.

    Usage::

        client = SnapAPI(api_key="sk_live_...")
        png = client.screenshot(url="https://example.com", full_page=True)
        info = client.extract_markdown("https://example.com")

    The API key, base URL and timeout fall back to ``SNAPAPI_KEY``,
    ``SNAPAPI_BASE_URL`` and ``SNAPAPI_TIMEOUT`` when not passed explicitly.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        *,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if config is not None and (api_key, base_url, timeout) != (None, None, None):
            raise SnapAPIValidationError("Pass either config or api_key/base_url/timeout, not both")
        self.config = config or ClientConfig.resolve(api_key, base_url, timeout)
        self._headers = _build_headers(self.config.api_key)
        self._client = httpx.Client(
            base_url=self.config.base_url,
            headers=self._headers,
            timeout=self.config.timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def timeout(self) -> float:
        return self.config.timeout

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> "SnapAPI":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Tuple[int, bytes]:
        """Send one request and return ``(status_code, content)``.

        The configured timeout bounds the whole exchange: the body is streamed
        and the deadline is checked as each chunk arrives.
        """
        kwargs: Dict[str, Any] = {}
        if method == "POST" and body is not None:
            kwargs["json"] = body
        deadline = time.monotonic() + self.config.timeout
        chunks: List[bytes] = []
        try:
            with self._client.stream(method, path, **kwargs) as resp:
                for chunk in resp.iter_bytes():
                    if time.monotonic() > deadline:
                        raise SnapAPITimeoutError(
                            f"Connection error: request exceeded {self.config.timeout}s timeout"
                        )
                    chunks.append(chunk)
        except httpx.TimeoutException as exc:
            raise SnapAPITimeoutError(f"Connection error: {exc}") from exc
        except httpx.TransportError as exc:
            raise SnapAPIConnectionError(f"Connection error: {exc}") from exc

        content = b"".join(chunks)
        logger.debug(f"{method} {path} -> {resp.status_code} ({len(content)} bytes)")
        if resp.status_code >= 400:
            raise _extract_error(resp.status_code, content)
        return resp.status_code, content

    def _call(
        self,
        name: str,
        options: OptionsInput = None,
        extra: Optional[Mapping[str, Any]] = None,
        job_id: Optional[str] = None,
    ) -> Any:
        op = OPERATIONS[name]
        body = _build_body(op, options, extra or {})
        path = _build_path(op, job_id)
        status_code, content = self._request(op.method, path, body)
        return _decode_content(op, body, content, status_code)

    # ------------------------------------------------------------------
    # Screenshots
    # ------------------------------------------------------------------

    def screenshot(self, options: OptionsInput = None, **kwargs: Any) -> Union[bytes, Dict[str, Any]]:
        """POST /v1/screenshot — image bytes, or JSON when ``responseType`` is json/base64."""
        return self._call("screenshot", options, kwargs)

    def screenshot_from_html(self, html: str, **kwargs: Any) -> Union[bytes, Dict[str, Any]]:
        """POST /v1/screenshot — render an HTML document."""
        return self._call("screenshot", {"html": html}, kwargs)

    def screenshot_from_markdown(self, markdown: str, **kwargs: Any) -> Union[bytes, Dict[str, Any]]:
        """POST /v1/screenshot — render a Markdown document."""
        return self._call("screenshot", {"markdown": markdown}, kwargs)

    def screenshot_device(self, url: str, device: str, **kwargs: Any) -> Union[bytes, Dict[str, Any]]:
        """POST /v1/screenshot — capture ``url`` using a device preset."""
        return self._call("screenshot", {"url": url, "device": device}, kwargs)

    def screenshot_async(self, options: OptionsInput = None, **kwargs: Any) -> Dict[str, Any]:
        """POST /v1/screenshot (async) — queue a capture and return the job stub."""
        return self._call("screenshot_async", options, kwargs)

    def get_screenshot_status(self, job_id: str) -> Dict[str, Any]:
        """GET /v1/screenshot/async/{id} — status and result of an async capture."""
        return self._call("screenshot_status", job_id=job_id)

    # ------------------------------------------------------------------
    # PDF & video
    # ------------------------------------------------------------------

    def pdf(self, options: OptionsInput = None, **kwargs: Any) -> Union[bytes, Dict[str, Any]]:
        """POST /v1/pdf — PDF bytes, or JSON when ``responseType`` is json/base64."""
        return self._call("pdf", options, kwargs)

    def pdf_from_html(self, html: str, **kwargs: Any) -> Union[bytes, Dict[str, Any]]:
        """POST /v1/pdf — render an HTML document to PDF."""
        return self._call("pdf", {"html": html}, kwargs)

    def video(self, options: OptionsInput = None, **kwargs: Any) -> Union[bytes, Dict[str, Any]]:
        """POST /v1/video — record a page; video bytes unless ``responseType`` says otherwise."""
        return self._call("video", options, kwargs)

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    def batch(self, options: OptionsInput = None, **kwargs: Any) -> Dict[str, Any]:
        """POST /v1/screenshot/batch — submit several URLs, return the job stub."""
        return self._call("batch", options, kwargs)

    def get_batch_status(self, job_id: str) -> Dict[str, Any]:
        """GET /v1/screenshot/batch/{id} — batch job status and results."""
        return self._call("batch_status", job_id=job_id)

    # ------------------------------------------------------------------
    # Content extraction & analysis
    # ------------------------------------------------------------------

    def extract(self, options: OptionsInput = None, **kwargs: Any) -> Dict[str, Any]:
        """POST /v1/extract — extract page content."""
        return self._call("extract", options, kwargs)

    def extract_html(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return self._call("extract_html", {"url": url}, kwargs)

    def extract_text(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return self._call("extract_text", {"url": url}, kwargs)

    def extract_markdown(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return self._call("extract_markdown", {"url": url}, kwargs)

    def extract_article(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return self._call("extract_article", {"url": url}, kwargs)

    def extract_links(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return self._call("extract_links", {"url": url}, kwargs)

    def extract_images(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return self._call("extract_images", {"url": url}, kwargs)

    def extract_metadata(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return self._call("extract_metadata", {"url": url}, kwargs)

    def extract_structured(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return self._call("extract_structured", {"url": url}, kwargs)

    def analyze(self, options: OptionsInput = None, **kwargs: Any) -> Dict[str, Any]:
        """POST /v1/analyze — ask an AI model about a page."""
        return self._call("analyze", options, kwargs)

    # ------------------------------------------------------------------
    # Account & service info
    # ------------------------------------------------------------------

    def get_usage(self) -> Dict[str, Any]:
        """GET /v1/usage — used, limit, remaining, resetAt."""
        return self._call("usage")

    def get_devices(self) -> Dict[str, Any]:
        """GET /v1/devices — device presets grouped by category."""
        return self._call("devices")

    def get_capabilities(self) -> Dict[str, Any]:
        """GET /v1/capabilities — features available to this key."""
        return self._call("capabilities")

    def ping(self) -> Dict[str, Any]:
        """GET /v1/ping — service liveness check."""
        return self._call("ping")
