"""Smoke test for the local dry-run decode CLI."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "scripts/dry_run_decode.py", *args],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
    )


def test_dry_run_summarizes_multicast_response(tmp_path: Path) -> None:
    payload = tmp_path / "response.json"
    payload.write_text(
        json.dumps(
            {
                "multicast_id": 7,
                "success": 1,
                "failure": 1,
                "results": [{"message_id": "1:ok"}, {"error": "NotRegistered"}],
            }
        ),
        encoding="utf-8",
    )

    result = _run(str(payload))

    assert result.returncode == 0
    data = json.loads(result.stdout.strip())
    assert data["multicast_id"] == 7
    assert [item["error"] for item in data["results"]] == [None, "NotRegistered"]
    assert [item["unregistered"] for item in data["results"]] == [False, True]


def test_dry_run_single_result(tmp_path: Path) -> None:
    payload = tmp_path / "result.json"
    payload.write_text('{"error": "Unavailable"}', encoding="utf-8")

    result = _run(str(payload), "--result")

    assert result.returncode == 0
    data = json.loads(result.stdout.strip())
    assert data == {
        "message_id": None,
        "registration_id": None,
        "error": "Unavailable",
        "unregistered": False,
    }


def test_dry_run_reports_decode_error(tmp_path: Path) -> None:
    payload = tmp_path / "broken.json"
    payload.write_text('{"results": [', encoding="utf-8")

    result = _run(str(payload))

    assert result.returncode == 1
    assert result.stdout == ""
    assert json.loads(result.stderr.strip()) == {
        "status": "error",
        "reason": "invalid_json",
    }


def test_dry_run_reports_oversized_integer_without_traceback(tmp_path: Path) -> None:
    payload = tmp_path / "oversized.json"
    payload.write_text('{"multicast_id": ' + "9" * 5000 + "}", encoding="utf-8")

    result = _run(str(payload))

    assert result.returncode == 1
    assert "Traceback" not in result.stderr
    assert json.loads(result.stderr.strip())["reason"] in {
        "invalid_json",
        "schema_mismatch",
    }
