"""Decode FCM legacy HTTP response bodies into typed results.

Decoding runs in two stages that can be called separately:

1. ``load_wire_response`` / ``load_wire_result`` turn raw bytes into a plain
   mapping and check every value's JSON type against the wire schema.
2. ``response_from_wire`` / ``result_from_wire`` enrich that mapping, running
   each error code through :func:`classify`.

Only stage 1 can fail. Service error codes never raise; they become
:class:`ErrorKind` values on the decoded entities.

Null handling follows the service's own clients: a null field is treated as
absent, a null entry in ``results`` becomes an empty :class:`Result`, and a null
entry in ``failed_registration_ids`` becomes ``""``. Integer fields must be
written as JSON integers; ``3.0`` is a type mismatch.

Warnings about unrecognised error codes are rate-limited per code; only the
most recently warned codes are remembered, so memory stays bounded.
"""

from __future__ import annotations

import json
import logging
import time
from collections import OrderedDict
from typing import Any, Mapping

from ..domain.models import Response, Result
from ..wire import reason_codes, schema_registry
from ..wire.schema_registry import SchemaValidationError
from .decode_limits import DecodeLimitConfig
from .error_kind import ErrorKind, classify

_LOG = logging.getLogger(__name__)

_MAX_LOGGED_CODE_CHARS = 64
_WARNING_INTERVAL_OVERRIDE: float | None = None
_MAX_TRACKED_CODES = 256
_LAST_WARN: OrderedDict[str, float] = OrderedDict()


class DecodeError(ValueError):
    """Raised when a payload is not valid JSON of the expected shape."""

    def __init__(self, message: str, *, reason: str, path: str | None = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.path = path


class PayloadTooLargeError(DecodeError):
    """Raised when a payload exceeds the configured size bound."""

    def __init__(self, message: str) -> None:
        super().__init__(message, reason=reason_codes.PAYLOAD_TOO_LARGE)


def decode_response(
    payload: bytes | str, *, limits: DecodeLimitConfig | None = None
) -> Response:
    """Decode a full send response, multicast or topic shaped."""

    limits = limits or DecodeLimitConfig.from_env()
    raw = load_wire_response(payload, limits=limits)
    response = response_from_wire(raw, limits=limits)
    _LOG.debug(
        "Decoded FCM response with %d results (topic error: %s)",
        response.results_count,
        response.error,
    )
    return response


def decode_result(
    payload: bytes | str, *, limits: DecodeLimitConfig | None = None
) -> Result:
    """Decode a single per-recipient result object."""

    limits = limits or DecodeLimitConfig.from_env()
    raw = load_wire_result(payload, limits=limits)
    return result_from_wire(raw, limits=limits)


def load_wire_response(
    payload: bytes | str, *, limits: DecodeLimitConfig | None = None
) -> dict[str, Any]:
    """Parse and type-check a response body without classifying errors."""

    return _load_wire(payload, schema_registry.RESPONSE_SCHEMA, limits)


def load_wire_result(
    payload: bytes | str, *, limits: DecodeLimitConfig | None = None
) -> dict[str, Any]:
    """Parse and type-check one result object without classifying errors."""

    return _load_wire(payload, schema_registry.RESULT_SCHEMA, limits)


def response_from_wire(
    raw: Mapping[str, Any], *, limits: DecodeLimitConfig | None = None
) -> Response:
    """Build a :class:`Response` from a mapping that passed the wire schema."""

    raw_results = raw.get("results")
    results = None
    if raw_results is not None:
        results = tuple(result_from_wire(item, limits=limits) for item in raw_results)

    failed_ids = raw.get("failed_registration_ids")
    if failed_ids is not None:
        # A null token reads as an empty string, as the service's clients do.
        failed_ids = tuple("" if token is None else token for token in failed_ids)
    return Response(
        multicast_id=raw.get("multicast_id"),
        success=raw.get("success"),
        failure=raw.get("failure"),
        canonical_ids=raw.get("canonical_ids"),
        results=results,
        failed_registration_ids=failed_ids,
        message_id=raw.get("message_id"),
        error=_classify_field(raw.get("error"), limits),
    )


def result_from_wire(
    raw: Mapping[str, Any] | None, *, limits: DecodeLimitConfig | None = None
) -> Result:
    """Build a :class:`Result` from a mapping that passed the wire schema."""

    if raw is None:
        return Result()
    return Result(
        message_id=raw.get("message_id"),
        registration_id=raw.get("registration_id"),
        error=_classify_field(raw.get("error"), limits),
    )


def _load_wire(
    payload: bytes | str, schema_name: str, limits: DecodeLimitConfig | None
) -> dict[str, Any]:
    limits = limits or DecodeLimitConfig.from_env()
    if isinstance(payload, str):
        text = payload
        if limits.max_payload_bytes is not None:
            _check_size(len(payload.encode("utf-8")), limits)
    else:
        _check_size(len(payload), limits)
        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(
                "Payload is not valid UTF-8.", reason=reason_codes.INVALID_ENCODING
            ) from exc

    try:
        raw = json.loads(text)
    except (ValueError, RecursionError) as exc:
        # Also covers integer literals past the int() digit limit.
        raise DecodeError(
            "Payload is not valid JSON.", reason=reason_codes.INVALID_JSON
        ) from exc

    try:
        schema_registry.validate(schema_name, raw)
    except SchemaValidationError as exc:
        path = _json_path(exc.absolute_path)
        raise DecodeError(
            f"Value at {path} does not match the FCM wire format.",
            reason=reason_codes.SCHEMA_MISMATCH,
            path=path,
        ) from exc

    return raw


def _check_size(payload_bytes: int, limits: DecodeLimitConfig) -> None:
    if not limits.allows(payload_bytes):
        raise PayloadTooLargeError("Payload exceeds the maximum allowed size.")


def _json_path(parts: Any) -> str:
    path = "$"
    for part in parts:
        path += f"[{part}]" if isinstance(part, int) else f".{part}"
    return path


def _classify_field(
    code: str | None, limits: DecodeLimitConfig | None
) -> ErrorKind | None:
    """Classify an error field; absent, null and empty all mean no error."""

    if not code:
        return None
    kind = classify(code)
    if kind is ErrorKind.UNKNOWN:
        _warn_unknown_code(code, limits)
    return kind


def _warn_unknown_code(code: str, limits: DecodeLimitConfig | None) -> None:
    shown = code[:_MAX_LOGGED_CODE_CHARS]
    if _should_warn(shown, _warning_interval(limits)):
        _LOG.warning("Unrecognised FCM error code %r classified as Unknown", shown)


def _warning_interval(limits: DecodeLimitConfig | None) -> float:
    if _WARNING_INTERVAL_OVERRIDE is not None:
        return _WARNING_INTERVAL_OVERRIDE
    return (limits or DecodeLimitConfig.from_env()).warning_interval_seconds


def _should_warn(key: str, interval: float) -> bool:
    if interval <= 0:
        return True
    now = time.monotonic()
    last = _LAST_WARN.get(key)
    if last is not None and now - last < interval:
        return False
    _LAST_WARN[key] = now
    _LAST_WARN.move_to_end(key)
    while len(_LAST_WARN) > _MAX_TRACKED_CODES:
        _LAST_WARN.popitem(last=False)
    return True


def set_warning_interval(seconds: float | None) -> None:
    """Override the unknown-code warning interval; None restores the config."""

    global _WARNING_INTERVAL_OVERRIDE
    if seconds is None:
        _WARNING_INTERVAL_OVERRIDE = None
    else:
        _WARNING_INTERVAL_OVERRIDE = max(seconds, 0.0)


def reset_warning_state() -> None:
    """Forget which unknown codes were already reported (tests only)."""

    _LAST_WARN.clear()
