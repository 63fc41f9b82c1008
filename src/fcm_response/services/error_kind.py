"""Error taxonomy reported by FCM for a recipient or a whole request."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ErrorKind(Enum):
    """Enumerate every service error code the decoder can classify."""

    MISSING_REGISTRATION = "MissingRegistration"
    INVALID_REGISTRATION = "InvalidRegistration"
    NOT_REGISTERED = "NotRegistered"
    INVALID_PACKAGE_NAME = "InvalidPackageName"
    MISMATCH_SENDER_ID = "MismatchSenderId"
    MESSAGE_TOO_BIG = "MessageTooBig"
    INVALID_DATA_KEY = "InvalidDataKey"
    INVALID_TTL = "InvalidTtl"
    UNAVAILABLE = "Unavailable"
    INTERNAL_SERVER_ERROR = "InternalServerError"
    DEVICE_MESSAGE_RATE_EXCEEDED = "DeviceMessageRateExceeded"
    TOPICS_MESSAGE_RATE_EXCEEDED = "TopicsMessageRateExceeded"
    INVALID_PARAMETERS = "InvalidParameters"
    INVALID_APNS_CREDENTIAL = "InvalidApnsCredential"
    UNKNOWN = "Unknown"

    @property
    def temporary(self) -> bool:
        """True when a caller may retry the same send later."""

        return self in _TEMPORARY_KINDS

    @property
    def timeout(self) -> bool:
        """True when the failure should be handled like a network timeout."""

        return self in _TIMEOUT_KINDS

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    def __str__(self) -> str:
        return self.value


_TEMPORARY_KINDS = frozenset(
    {ErrorKind.UNAVAILABLE, ErrorKind.INTERNAL_SERVER_ERROR}
)
"""Kinds a retry policy may treat as transient."""

_TIMEOUT_KINDS = frozenset({ErrorKind.UNAVAILABLE})
"""Kinds that behave like a dropped or timed-out connection."""

_DESCRIPTIONS: Mapping[ErrorKind, str] = MappingProxyType(
    {
        ErrorKind.MISSING_REGISTRATION: "The request did not include a registration token.",
        ErrorKind.INVALID_REGISTRATION: "The registration token is malformed.",
        ErrorKind.NOT_REGISTERED: (
            "The token is no longer registered; the app was likely uninstalled."
        ),
        ErrorKind.INVALID_PACKAGE_NAME: (
            "The token does not match the package name in the request."
        ),
        ErrorKind.MISMATCH_SENDER_ID: (
            "The token is tied to a different sender; the app re-registered."
        ),
        ErrorKind.MESSAGE_TOO_BIG: "The message payload exceeds the size limit.",
        ErrorKind.INVALID_DATA_KEY: "The data payload uses a reserved key.",
        ErrorKind.INVALID_TTL: "The time_to_live value is out of range.",
        ErrorKind.UNAVAILABLE: "The service timed out; retry with backoff.",
        ErrorKind.INTERNAL_SERVER_ERROR: "The service hit an internal error; retry.",
        ErrorKind.DEVICE_MESSAGE_RATE_EXCEEDED: (
            "Too many messages were sent to a single device."
        ),
        ErrorKind.TOPICS_MESSAGE_RATE_EXCEEDED: (
            "Too many messages were sent to subscribers of a topic."
        ),
        ErrorKind.INVALID_PARAMETERS: "The request contained invalid parameters.",
        ErrorKind.INVALID_APNS_CREDENTIAL: (
            "The APNs credential configured for iOS delivery is invalid."
        ),
        ErrorKind.UNKNOWN: "The service returned an unrecognised error code.",
    }
)

ERROR_CODES: Mapping[str, ErrorKind] = MappingProxyType(
    {
        "MissingRegistration": ErrorKind.MISSING_REGISTRATION,
        "InvalidRegistration": ErrorKind.INVALID_REGISTRATION,
        "NotRegistered": ErrorKind.NOT_REGISTERED,
        "InvalidPackageName": ErrorKind.INVALID_PACKAGE_NAME,
        "MismatchSenderId": ErrorKind.MISMATCH_SENDER_ID,
        "MessageTooBig": ErrorKind.MESSAGE_TOO_BIG,
        "InvalidDataKey": ErrorKind.INVALID_DATA_KEY,
        "InvalidTtl": ErrorKind.INVALID_TTL,
        "Unavailable": ErrorKind.UNAVAILABLE,
        "InternalServerError": ErrorKind.INTERNAL_SERVER_ERROR,
        "DeviceMessageRateExceeded": ErrorKind.DEVICE_MESSAGE_RATE_EXCEEDED,
        "TopicsMessageRateExceeded": ErrorKind.TOPICS_MESSAGE_RATE_EXCEEDED,
        "InvalidParameters": ErrorKind.INVALID_PARAMETERS,
        "InvalidApnsCredential": ErrorKind.INVALID_APNS_CREDENTIAL,
    }
)
"""Read-only table from wire error code to its classified kind."""


def classify(code: str) -> ErrorKind:
    """Return the kind for a wire error code, or ``UNKNOWN`` if unrecognised."""

    return ERROR_CODES.get(code, ErrorKind.UNKNOWN)
