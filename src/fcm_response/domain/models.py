"""Decoded FCM response entities, free of any parsing or I/O."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..services.error_kind import ErrorKind

UNREGISTERED_KINDS = frozenset(
    {
        ErrorKind.NOT_REGISTERED,
        ErrorKind.MISMATCH_SENDER_ID,
        ErrorKind.MISSING_REGISTRATION,
        ErrorKind.INVALID_REGISTRATION,
    }
)
"""Kinds meaning the token no longer names a valid delivery target."""


@dataclass(frozen=True)
class Result:
    """Outcome of a send to one registration token."""

    message_id: str | None = None
    registration_id: str | None = None
    error: ErrorKind | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def has_canonical_id(self) -> bool:
        """True when the service handed back a replacement token."""

        return bool(self.registration_id)

    @property
    def unregistered(self) -> bool:
        return is_unregistered(self)


def is_unregistered(result: Result) -> bool:
    """
    Return True when the token behind ``result`` should be dropped.

    The app was uninstalled, re-registered under another sender, or the token
    was malformed or missing. Every other error kind, and success, is False.
    """

    return result.error in UNREGISTERED_KINDS


@dataclass(frozen=True)
class Response:
    """
    Decoded body of one FCM send call.

    Which fields are set depends on the endpoint that produced the payload:
    multicast and device-group sends fill the counters, ``results`` and
    ``failed_registration_ids``; topic sends fill ``message_id`` and
    ``error``. A field is ``None`` exactly when its key was absent or null.
    """

    multicast_id: int | None = None
    success: int | None = None
    failure: int | None = None
    canonical_ids: int | None = None
    results: tuple[Result, ...] | None = None
    failed_registration_ids: tuple[str, ...] | None = None
    message_id: int | None = None
    error: ErrorKind | None = None

    @property
    def results_count(self) -> int:
        return len(self.results or ())

    def unregistered_tokens(self, tokens: Sequence[str]) -> list[str]:
        """Return the request tokens whose results mark them unregistered."""

        return [
            token
            for token, result in self._paired(tokens)
            if is_unregistered(result)
        ]

    def canonical_updates(self, tokens: Sequence[str]) -> dict[str, str]:
        """Map each request token that has a canonical ID to its replacement."""

        return {
            token: result.registration_id
            for token, result in self._paired(tokens)
            if result.registration_id
        }

    def retryable_tokens(self, tokens: Sequence[str]) -> list[str]:
        """Return the request tokens whose results carry a temporary error."""

        return [
            token
            for token, result in self._paired(tokens)
            if result.error is not None and result.error.temporary
        ]

    def _paired(self, tokens: Sequence[str]) -> list[tuple[str, Result]]:
        results = self.results or ()
        if len(tokens) != len(results):
            raise ValueError(
                f"Expected {len(results)} tokens to match results, got {len(tokens)}."
            )
        return list(zip(tokens, results))
