"""Reason codes attached to decode failures."""

from __future__ import annotations

INVALID_ENCODING = "invalid_encoding"
"""Payload bytes were not valid UTF-8."""

INVALID_JSON = "invalid_json"
"""Payload was not syntactically valid JSON."""

SCHEMA_MISMATCH = "schema_mismatch"
"""Payload parsed but a value had the wrong JSON type or range."""

PAYLOAD_TOO_LARGE = "payload_too_large"
"""Payload exceeded the configured size bound."""
