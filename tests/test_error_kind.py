"""Contract tests for the FCM error-code classifier."""

import pytest

from fcm_response.services.error_kind import ERROR_CODES, ErrorKind, classify

KNOWN_CODES = {
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


@pytest.mark.parametrize("code,expected", sorted(KNOWN_CODES.items()))
def test_known_codes_map_to_their_kind(code: str, expected: ErrorKind) -> None:
    assert classify(code) is expected


def test_code_table_covers_exactly_the_known_codes() -> None:
    assert dict(ERROR_CODES) == KNOWN_CODES


@pytest.mark.parametrize(
    "code",
    [
        "notregistered",
        "NOTREGISTERED",
        "InvalidTTL",
        " NotRegistered",
        "Unknown",
        "QuotaExceeded",
        "x" * 500,
    ],
)
def test_unrecognised_codes_degrade_to_unknown(code: str) -> None:
    """Matching is exact and case-sensitive; anything else is Unknown."""

    assert classify(code) is ErrorKind.UNKNOWN


def test_code_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        ERROR_CODES["NewCode"] = ErrorKind.UNKNOWN  # type: ignore[index]


def test_unavailable_is_temporary_and_timeout() -> None:
    kind = classify("Unavailable")

    assert kind.temporary is True
    assert kind.timeout is True


def test_internal_server_error_is_temporary_without_timeout() -> None:
    kind = classify("InternalServerError")

    assert kind.temporary is True
    assert kind.timeout is False


@pytest.mark.parametrize(
    "kind",
    [
        kind
        for kind in ErrorKind
        if kind not in (ErrorKind.UNAVAILABLE, ErrorKind.INTERNAL_SERVER_ERROR)
    ],
)
def test_other_kinds_carry_no_retry_metadata(kind: ErrorKind) -> None:
    assert kind.temporary is False
    assert kind.timeout is False


def test_every_kind_has_a_description() -> None:
    for kind in ErrorKind:
        assert kind.description


def test_str_renders_wire_code() -> None:
    assert str(ErrorKind.MISMATCH_SENDER_ID) == "MismatchSenderId"
