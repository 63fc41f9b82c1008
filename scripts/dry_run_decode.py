"""LOCAL-only CLI to decode a saved FCM response body and summarize it."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT.parent / "src"))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Decode a saved FCM send response and print a summary.",
    )
    parser.add_argument(
        "payload_path",
        type=Path,
        help="Path to the raw JSON response body.",
    )
    parser.add_argument(
        "--result",
        action="store_true",
        help="Treat the payload as a single per-recipient result object.",
    )
    return parser.parse_args()


def _error_code(kind) -> str | None:
    return kind.value if kind is not None else None


def summarize_result(result) -> dict[str, object]:
    return {
        "message_id": result.message_id,
        "registration_id": result.registration_id,
        "error": _error_code(result.error),
        "unregistered": result.unregistered,
    }


def summarize_response(response) -> dict[str, object]:
    summary: dict[str, object] = {
        "multicast_id": response.multicast_id,
        "success": response.success,
        "failure": response.failure,
        "canonical_ids": response.canonical_ids,
        "message_id": response.message_id,
        "error": _error_code(response.error),
    }
    if response.results is not None:
        summary["results"] = [summarize_result(item) for item in response.results]
    if response.failed_registration_ids is not None:
        summary["failed_registration_ids"] = list(response.failed_registration_ids)
    return summary


def main() -> int:
    args = parse_args()
    payload = args.payload_path.read_bytes()

    from fcm_response.services.response_decoder import (
        DecodeError,
        decode_response,
        decode_result,
    )

    try:
        if args.result:
            summary = summarize_result(decode_result(payload))
        else:
            summary = summarize_response(decode_response(payload))
    except DecodeError as exc:
        sys.stderr.write(json.dumps({"status": "error", "reason": exc.reason}))
        return 1

    sys.stdout.write(json.dumps(summary, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
