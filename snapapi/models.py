"""Typed request options for each SnapAPI operation.

Every model accepts its fields by Python name (``full_page``) or by wire name
(``fullPage``) and serializes under the wire name. Keys the model does not
declare are kept and sent verbatim, so new service options can be used before
the SDK knows about them.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ResponseType = Literal["binary", "json", "base64"]


class RequestOptions(BaseModel):
    """Base for all option models: camelCase on the wire, open to extra keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_body(self) -> Dict[str, Any]:
        """Serialize to the JSON body sent to the API, omitting unset options."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ============================================================
# Nested option groups
# ============================================================

class ThumbnailOptions(RequestOptions):
    enabled: Optional[bool] = None
    width: Optional[int] = None
    height: Optional[int] = None


class PdfPageOptions(RequestOptions):
    """Page layout passed as ``pdfOptions``."""
    page_size: Optional[str] = Field(None, description="Paper size, e.g. 'a4' or 'letter'")
    landscape: Optional[bool] = None
    print_background: Optional[bool] = None
    scale: Optional[float] = None
    margin_top: Optional[str] = None
    margin_right: Optional[str] = None
    margin_bottom: Optional[str] = None
    margin_left: Optional[str] = None


class Cookie(RequestOptions):
    name: str
    value: str
    domain: Optional[str] = None
    path: Optional[str] = None


# ============================================================
# Operation options
# ============================================================

class ScreenshotOptions(RequestOptions):
    """Options for ``/v1/screenshot``. One of ``url``, ``html`` or ``markdown`` is required."""
    url: Optional[str] = None
    html: Optional[str] = None
    markdown: Optional[str] = None
    format: Optional[str] = Field(None, description="png, jpeg, webp or pdf")
    width: Optional[int] = None
    height: Optional[int] = None
    device: Optional[str] = Field(None, description="Device preset id, see get_devices()")
    full_page: Optional[bool] = None
    quality: Optional[int] = None
    scale: Optional[float] = None
    delay: Optional[Union[int, float]] = Field(None, description="Milliseconds to wait before capture")
    timeout: Optional[Union[int, float]] = None
    dark_mode: Optional[bool] = None
    mobile: Optional[bool] = None
    selector: Optional[str] = None
    wait_for_selector: Optional[str] = None
    css: Optional[str] = None
    javascript: Optional[str] = None
    block_ads: Optional[bool] = None
    block_trackers: Optional[bool] = None
    block_cookie_banners: Optional[bool] = None
    block_chat_widgets: Optional[bool] = None
    hide_cookie_banners: Optional[bool] = None
    cookies: Optional[List[Cookie]] = None
    headers: Optional[Dict[str, Any]] = None
    include_metadata: Optional[bool] = None
    thumbnail: Optional[ThumbnailOptions] = None
    webhook_url: Optional[str] = None
    response_type: Optional[ResponseType] = None


class PdfOptions(RequestOptions):
    """Options for ``/v1/pdf``. One of ``url`` or ``html`` is required."""
    url: Optional[str] = None
    html: Optional[str] = None
    pdf_options: Optional[PdfPageOptions] = None
    delay: Optional[Union[int, float]] = None
    timeout: Optional[Union[int, float]] = None
    wait_for_selector: Optional[str] = None
    css: Optional[str] = None
    javascript: Optional[str] = None
    response_type: Optional[ResponseType] = None


class VideoOptions(RequestOptions):
    url: Optional[str] = None
    format: Optional[str] = Field(None, description="mp4, webm or gif")
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = Field(None, description="Recording length in seconds")
    fps: Optional[int] = None
    scrolling: Optional[bool] = None
    delay: Optional[Union[int, float]] = None
    dark_mode: Optional[bool] = None
    block_ads: Optional[bool] = None
    response_type: Optional[ResponseType] = None


class BatchOptions(RequestOptions):
    urls: Optional[List[str]] = None
    format: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    full_page: Optional[bool] = None
    dark_mode: Optional[bool] = None
    block_ads: Optional[bool] = None
    webhook_url: Optional[str] = None


class ExtractOptions(RequestOptions):
    url: Optional[str] = None
    format: Optional[str] = Field(
        None,
        description="html, text, markdown, article, links, images, metadata or structured",
    )
    selector: Optional[str] = None
    wait_for_selector: Optional[str] = None
    max_length: Optional[int] = None
    block_ads: Optional[bool] = None


class AnalyzeOptions(RequestOptions):
    url: Optional[str] = None
    prompt: Optional[str] = None
    provider: Optional[str] = None
    model: Optional[str] = None
    include_screenshot: Optional[bool] = None
    include_metadata: Optional[bool] = None
