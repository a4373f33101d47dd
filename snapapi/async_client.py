"""Asynchronous SnapAPI client (uses httpx.AsyncClient)."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Union

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


class AsyncSnapAPI:
    """Async Python client for the SnapAPI service.

    Usage::

        async with AsyncSnapAPI(api_key="sk_live_...") as client:
            shots = await asyncio.gather(
                client.screenshot(url="https://example.com"),
                client.screenshot(url="https://example.org"),
            )

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
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if config is not None and (api_key, base_url, timeout) != (None, None, None):
            raise SnapAPIValidationError("Pass either config or api_key/base_url/timeout, not both")
        self.config = config or ClientConfig.resolve(api_key, base_url, timeout)
        self._headers = _build_headers(self.config.api_key)
        self._client = httpx.AsyncClient(
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

    async def __aenter__(self) -> "AsyncSnapAPI":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Tuple[int, bytes]:
        """Send one request and return ``(status_code, content)``.

        The configured timeout bounds the whole exchange, body included.
        """
        kwargs: Dict[str, Any] = {}
        if method == "POST" and body is not None:
            kwargs["json"] = body
        try:
            resp = await asyncio.wait_for(
                self._client.request(method, path, **kwargs), self.config.timeout
            )
        except asyncio.TimeoutError as exc:
            raise SnapAPITimeoutError(
                f"Connection error: request exceeded {self.config.timeout}s timeout"
            ) from exc
        except httpx.TimeoutException as exc:
            raise SnapAPITimeoutError(f"Connection error: {exc}") from exc
        except httpx.TransportError as exc:
            raise SnapAPIConnectionError(f"Connection error: {exc}") from exc

        logger.debug(f"{method} {path} -> {resp.status_code} ({len(resp.content)} bytes)")
        if resp.status_code >= 400:
            raise _extract_error(resp.status_code, resp.content)
        return resp.status_code, resp.content

    async def _call(
        self,
        name: str,
        options: OptionsInput = None,
        extra: Optional[Mapping[str, Any]] = None,
        job_id: Optional[str] = None,
    ) -> Any:
        op = OPERATIONS[name]
        body = _build_body(op, options, extra or {})
        path = _build_path(op, job_id)
        status_code, content = await self._request(op.method, path, body)
        return _decode_content(op, body, content, status_code)

    # ------------------------------------------------------------------
    # Screenshots
    # ------------------------------------------------------------------

    async def screenshot(self, options: OptionsInput = None, **kwargs: Any) -> Union[bytes, Dict[str, Any]]:
        """POST /v1/screenshot — image bytes, or JSON when ``responseType`` is json/base64."""
        return await self._call("screenshot", options, kwargs)

    async def screenshot_from_html(self, html: str, **kwargs: Any) -> Union[bytes, Dict[str, Any]]:
        """POST /v1/screenshot — render an HTML document."""
        return await self._call("screenshot", {"html": html}, kwargs)

    async def screenshot_from_markdown(self, markdown: str, **kwargs: Any) -> Union[bytes, Dict[str, Any]]:
        """POST /v1/screenshot — render a Markdown document."""
        return await self._call("screenshot", {"markdown": markdown}, kwargs)

    async def screenshot_device(self, url: str, device: str, **kwargs: Any) -> Union[bytes, Dict[str, Any]]:
        """POST /v1/screenshot — capture ``url`` using a device preset."""
        return await self._call("screenshot", {"url": url, "device": device}, kwargs)

    async def screenshot_async(self, options: OptionsInput = None, **kwargs: Any) -> Dict[str, Any]:
        """POST /v1/screenshot (async) — queue a capture and return the job stub."""
        return await self._call("screenshot_async", options, kwargs)

    async def get_screenshot_status(self, job_id: str) -> Dict[str, Any]:
        """GET /v1/screenshot/async/{id} — status and result of an async capture."""
        return await self._call("screenshot_status", job_id=job_id)

    # ------------------------------------------------------------------
    # PDF & video
    # ------------------------------------------------------------------

    async def pdf(self, options: OptionsInput = None, **kwargs: Any) -> Union[bytes, Dict[str, Any]]:
        """POST /v1/pdf — PDF bytes, or JSON when ``responseType`` is json/base64."""
        return await self._call("pdf", options, kwargs)

    async def pdf_from_html(self, html: str, **kwargs: Any) -> Union[bytes, Dict[str, Any]]:
        """POST /v1/pdf — render an HTML document to PDF."""
        return await self._call("pdf", {"html": html}, kwargs)

    async def video(self, options: OptionsInput = None, **kwargs: Any) -> Union[bytes, Dict[str, Any]]:
        """POST /v1/video — record a page; video bytes unless ``responseType`` says otherwise."""
        return await self._call("video", options, kwargs)

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    async def batch(self, options: OptionsInput = None, **kwargs: Any) -> Dict[str, Any]:
        """POST /v1/screenshot/batch — submit several URLs, return the job stub."""
        return await self._call("batch", options, kwargs)

    async def get_batch_status(self, job_id: str) -> Dict[str, Any]:
        """GET /v1/screenshot/batch/{id} — batch job status and results."""
        return await self._call("batch_status", job_id=job_id)

    # ------------------------------------------------------------------
    # Content extraction & analysis
    # ------------------------------------------------------------------

    async def extract(self, options: OptionsInput = None, **kwargs: Any) -> Dict[str, Any]:
        """POST /v1/extract — extract page content."""
        return await self._call("extract", options, kwargs)

    async def extract_html(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return await self._call("extract_html", {"url": url}, kwargs)

    async def extract_text(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return await self._call("extract_text", {"url": url}, kwargs)

    async def extract_markdown(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return await self._call("extract_markdown", {"url": url}, kwargs)

    async def extract_article(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return await self._call("extract_article", {"url": url}, kwargs)

    async def extract_links(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return await self._call("extract_links", {"url": url}, kwargs)

    async def extract_images(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return await self._call("extract_images", {"url": url}, kwargs)

    async def extract_metadata(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return await self._call("extract_metadata", {"url": url}, kwargs)

    async def extract_structured(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        return await self._call("extract_structured", {"url": url}, kwargs)

    async def analyze(self, options: OptionsInput = None, **kwargs: Any) -> Dict[str, Any]:
        """POST /v1/analyze — ask an AI model about a page."""
        return await self._call("analyze", options, kwargs)

    # ------------------------------------------------------------------
    # Account & service info
    # ------------------------------------------------------------------

    async def get_usage(self) -> Dict[str, Any]:
        """GET /v1/usage — used, limit, remaining, resetAt."""
        return await self._call("usage")

    async def get_devices(self) -> Dict[str, Any]:
        """GET /v1/devices — device presets grouped by category."""
        return await self._call("devices")

    async def get_capabilities(self) -> Dict[str, Any]:
        """GET /v1/capabilities — features available to this key."""
        return await self._call("capabilities")

    async def ping(self) -> Dict[str, Any]:
        """GET /v1/ping — service liveness check."""
        return await self._call("ping")
