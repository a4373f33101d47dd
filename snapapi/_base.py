"""Shared constants, the operation table and helpers used by both sync and async clients."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Type, Union, get_args
from urllib.parse import quote

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from snapapi.exceptions import SnapAPIError, SnapAPIHTTPError, SnapAPIValidationError
from snapapi.models import (
    AnalyzeOptions,
    BatchOptions,
    ExtractOptions,
    PdfOptions,
    ResponseType,
    RequestOptions,
    ScreenshotOptions,
    VideoOptions,
)

__version__ = "1.0.0"

USER_AGENT = f"snapapi-python/{__version__}"

BINARY = "binary"
JSON = "json"

OptionsInput = Union[RequestOptions, Mapping[str, Any], None]

RESPONSE_TYPES: Tuple[str, ...] = get_args(ResponseType)


@dataclass(frozen=True)
class Operation:
    """One row of the operation table.

    ``result`` is ``BINARY`` when the caller's ``responseType`` decides between
    raw bytes and parsed JSON, or ``JSON`` when the response is always parsed.
    ``require_any`` lists body keys of which at least one must be non-empty;
    ``require_list`` names a key that must hold a non-empty list.
    """

    method: str
    path: str
    result: str = JSON
    options: Optional[Type[RequestOptions]] = None
    overrides: Mapping[str, Any] = field(default_factory=dict)
    require_any: Tuple[str, ...] = ()
    require_list: Optional[str] = None


OPERATIONS: Dict[str, Operation] = {
    "screenshot": Operation(
        "POST", "/v1/screenshot", BINARY, ScreenshotOptions,
        require_any=("url", "html", "markdown"),
    ),
    "screenshot_async": Operation(
        "POST", "/v1/screenshot", JSON, ScreenshotOptions,
        overrides={"async": True},
        require_any=("url", "html", "markdown"),
    ),
    "screenshot_status": Operation("GET", "/v1/screenshot/async/{job_id}"),
    "pdf": Operation("POST", "/v1/pdf", BINARY, PdfOptions, require_any=("url", "html")),
    "video": Operation("POST", "/v1/video", BINARY, VideoOptions, require_any=("url",)),
    "batch": Operation("POST", "/v1/screenshot/batch", JSON, BatchOptions, require_list="urls"),
    "batch_status": Operation("GET", "/v1/screenshot/batch/{job_id}"),
    "extract": Operation("POST", "/v1/extract", JSON, ExtractOptions, require_any=("url",)),
    "analyze": Operation("POST", "/v1/analyze", JSON, AnalyzeOptions, require_any=("url",)),
    "usage": Operation("GET", "/v1/usage"),
    "devices": Operation("GET", "/v1/devices"),
    "capabilities": Operation("GET", "/v1/capabilities"),
    "ping": Operation("GET", "/v1/ping"),
}

EXTRACT_FORMATS = ("html", "text", "markdown", "article", "links", "images", "metadata", "structured")

for _fmt in EXTRACT_FORMATS:
    OPERATIONS[f"extract_{_fmt}"] = Operation(
        "POST", "/v1/extract", JSON, ExtractOptions,
        overrides={"format": _fmt},
        require_any=("url",),
    )


def _build_headers(api_key: str) -> Dict[str, str]:
    return {
        "X-Api-Key": api_key,
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }


def _build_path(op: Operation, job_id: Optional[str]) -> str:
    if "{job_id}" not in op.path:
        return op.path
    if not job_id or not str(job_id).strip():
        raise SnapAPIValidationError("Job ID is required")
    return op.path.format(job_id=quote(str(job_id), safe=""))


def _build_body(
    op: Operation, options: OptionsInput, extra: Mapping[str, Any]
) -> Optional[Dict[str, Any]]:
    """Merge and serialize the options for ``op``.

    A plain mapping is sent as given, keys and values untouched. A typed
    options model is serialized under its wire names. Keyword arguments are
    type-checked against the operation's model, renamed to wire names and
    applied on top, keeping the caller's values; ``None`` keywords are
    dropped. Operation overrides are applied last.

    Raises SnapAPIValidationError when a keyword does not fit the model or a
    required input is missing. Never performs I/O.
    """
    if op.options is None:
        return None

    if isinstance(options, RequestOptions):
        body: Dict[str, Any] = options.to_body()
    elif options is None:
        body = {}
    elif isinstance(options, Mapping):
        body = dict(options)
    else:
        raise SnapAPIValidationError(
            f"Options must be a mapping or {op.options.__name__}, got {type(options).__name__}"
        )

    if extra:
        try:
            op.options.model_validate(extra)
        except ValidationError as exc:
            raise SnapAPIValidationError(
                f"Invalid options: {exc}", {"errors": exc.errors(include_url=False)}
            ) from exc
        body.update(_to_wire(op.options, extra))
    body.update(op.overrides)

    response_type = body.get("responseType")
    if response_type is not None and response_type not in RESPONSE_TYPES:
        raise SnapAPIValidationError(
            f"'responseType' must be one of {', '.join(RESPONSE_TYPES)}, got {response_type!r}"
        )
    if op.require_any and not any(body.get(key) for key in op.require_any):
        raise SnapAPIValidationError(_missing_message(op.require_any))
    if op.require_list is not None:
        value = body.get(op.require_list)
        if not value or not isinstance(value, list):
            raise SnapAPIValidationError(f"'{op.require_list}' must be a non-empty list")
    return body


def _to_wire(model: Type[RequestOptions], values: Mapping[str, Any]) -> Dict[str, Any]:
    """Rename declared Python field names to wire names, values unchanged."""
    wire: Dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        info = model.model_fields.get(key)
        if info is None:
            wire[key] = value
            continue
        nested = _nested_model(info.annotation)
        if nested is not None:
            value = _nested_to_wire(nested, value)
        wire[info.alias or to_camel(key)] = value
    return wire


def _nested_to_wire(model: Type[RequestOptions], value: Any) -> Any:
    if isinstance(value, RequestOptions):
        return value.to_body()
    if isinstance(value, Mapping):
        return _to_wire(model, value)
    if isinstance(value, list):
        return [_nested_to_wire(model, item) for item in value]
    return value


def _nested_model(annotation: Any) -> Optional[Type[RequestOptions]]:
    """Find the option model inside ``Optional[...]`` / ``List[...]`` annotations."""
    if isinstance(annotation, type) and issubclass(annotation, RequestOptions):
        return annotation
    for arg in get_args(annotation):
        found = _nested_model(arg)
        if found is not None:
            return found
    return None


def _missing_message(keys: Tuple[str, ...]) -> str:
    if len(keys) == 1:
        return f"'{keys[0]}' is required"
    names = ", ".join(f"'{k}'" for k in keys[:-1])
    return f"One of {names} or '{keys[-1]}' is required"


def _wants_json(op: Operation, body: Optional[Mapping[str, Any]]) -> bool:
    if op.result == JSON:
        return True
    response_type = (body or {}).get("responseType") or BINARY
    return response_type in ("json", "base64")


def _decode_content(op: Operation, body: Optional[Mapping[str, Any]], content: bytes, status_code: int) -> Any:
    """Return raw bytes or the parsed JSON document, depending on the operation."""
    if not _wants_json(op, body):
        return content
    try:
        return json.loads(content)
    except ValueError as exc:
        raise SnapAPIError(
            f"Invalid JSON in response: {exc}", "INVALID_RESPONSE", status_code
        ) from exc


def _extract_error(status_code: int, content: bytes) -> SnapAPIHTTPError:
    """Build the error for a failed response from an ``{"error": {...}}`` body."""
    try:
        payload = json.loads(content) if content else None
    except ValueError:
        payload = None

    error = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(error, dict):
        error = {}

    message = error.get("message")
    code = error.get("code")
    details = error.get("details")
    return SnapAPIHTTPError(
        message if message is not None else f"HTTP {status_code}",
        code if code is not None else "HTTP_ERROR",
        status_code,
        details if isinstance(details, dict) else None,
    )
