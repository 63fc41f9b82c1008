"""Configurable bounds for decoding FCM response payloads."""

from __future__ import annotations

import os
from dataclasses import dataclass

MAX_PAYLOAD_BYTES_ENV = "FCM_RESPONSE_MAX_PAYLOAD_BYTES"
"""Env var holding an optional maximum payload size in bytes."""

WARNING_INTERVAL_ENV = "FCM_RESPONSE_WARNING_INTERVAL"
"""Env var holding the seconds between repeated unknown-code warnings."""

DEFAULT_WARNING_INTERVAL_SECONDS = 60.0
"""Default rate limit for warnings about the same unknown error code."""


def _env_int(name: str, *, min_value: int = 1) -> int | None:
    """Return a positive integer from the environment, or None if unusable."""

    raw = os.getenv(name)
    if not raw or not raw.strip():
        return None
    try:
        parsed = int(raw)
    except ValueError:
        return None
    if parsed < min_value:
        return None
    return parsed


def _env_seconds(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw or not raw.strip():
        return default
    try:
        parsed = float(raw)
    except ValueError:
        return default
    return max(parsed, 0.0)


@dataclass(frozen=True)
class DecodeLimitConfig:
    """Container describing every configurable decode limit."""

    max_payload_bytes: int | None = None
    warning_interval_seconds: float = DEFAULT_WARNING_INTERVAL_SECONDS

    @classmethod
    def from_env(cls) -> "DecodeLimitConfig":
        """Return a limit set using the configured environment variables."""

        return cls(
            max_payload_bytes=_env_int(MAX_PAYLOAD_BYTES_ENV),
            warning_interval_seconds=_env_seconds(
                WARNING_INTERVAL_ENV, DEFAULT_WARNING_INTERVAL_SECONDS
            ),
        )

    def allows(self, payload_bytes: int) -> bool:
        """Return True when a payload of ``payload_bytes`` may be decoded."""

        return self.max_payload_bytes is None or payload_bytes <= self.max_payload_bytes


DEFAULT_DECODE_LIMITS = DecodeLimitConfig()
"""Unbounded limits used when no environment overrides apply."""
