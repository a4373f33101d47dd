"""SnapAPI SDK — Python client for the SnapAPI screenshot, PDF, video and extraction API."""

from snapapi._base import EXTRACT_FORMATS, OPERATIONS, __version__
from snapapi.async_client import AsyncSnapAPI
from snapapi.client import SnapAPI
from snapapi.config import ClientConfig
from snapapi.exceptions import (
    SnapAPIConnectionError,
    SnapAPIError,
    SnapAPIHTTPError,
    SnapAPITimeoutError,
    SnapAPIValidationError,
)
from snapapi.models import (
    AnalyzeOptions,
    BatchOptions,
    Cookie,
    ExtractOptions,
    PdfOptions,
    PdfPageOptions,
    ScreenshotOptions,
    ThumbnailOptions,
    VideoOptions,
)

__all__ = [
    "SnapAPI",
    "AsyncSnapAPI",
    "ClientConfig",
    "SnapAPIError",
    "SnapAPIValidationError",
    "SnapAPIConnectionError",
    "SnapAPITimeoutError",
    "SnapAPIHTTPError",
    "ScreenshotOptions",
    "PdfOptions",
    "PdfPageOptions",
    "VideoOptions",
    "BatchOptions",
    "ExtractOptions",
    "AnalyzeOptions",
    "ThumbnailOptions",
    "Cookie",
    "OPERATIONS",
    "EXTRACT_FORMATS",
]
