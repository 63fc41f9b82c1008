"""Registry of the FCM wire schemas, their validators and published examples.

Validation is stricter than stock Draft 7 about integers: a JSON number
written with a fraction or exponent (``3.0``, ``1e3``) is not an integer
here, matching how the service's own clients read the counters and ids.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from jsonschema import Draft7Validator, ValidationError, validators
from jsonschema.exceptions import best_match

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"
EXAMPLE_DIR = SCHEMA_DIR / "examples"

SchemaValidationError = ValidationError
"""Alias for jsonschema.ValidationError so callers never import jsonschema."""

RESPONSE_SCHEMA = "fcm_response_v1"
RESULT_SCHEMA = "fcm_result_v1"

SCHEMA_FILES = {
    RESPONSE_SCHEMA: "fcm_response_v1.json",
    RESULT_SCHEMA: "fcm_result_v1.json",
}

EXAMPLE_FILES = {
    name: f"{name}.json"
    for name in (
        "fcm_response_example_multicast",
        "fcm_response_example_device_group",
        "fcm_response_example_topic",
        "fcm_response_example_topic_error",
        "fcm_result_example_canonical",
    )
}


def _is_strict_integer(checker: Any, instance: Any) -> bool:
    return isinstance(instance, int) and not isinstance(instance, bool)


WireValidator = validators.extend(
    Draft7Validator,
    type_checker=Draft7Validator.TYPE_CHECKER.redefine(
        "integer", _is_strict_integer
    ),
)
"""Draft 7 validator whose ``integer`` type excludes every float."""

_VALIDATORS: dict[str, Any] = {}
_EXAMPLES: dict[str, Mapping[str, Any]] = {}


def _load_json_file(path: Path) -> Mapping[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def get_validator(name: str) -> Any:
    """Return the cached validator for a schema, checking the schema once."""

    validator = _VALIDATORS.get(name)
    if validator is None:
        schema = _load_json_file(SCHEMA_DIR / SCHEMA_FILES[name])
        WireValidator.check_schema(schema)
        validator = _VALIDATORS.setdefault(name, WireValidator(schema))
    return validator


def get_schema(name: str) -> Mapping[str, Any]:
    return get_validator(name).schema


def get_example(name: str) -> Mapping[str, Any]:
    """Return a representative example payload by name."""

    if name not in _EXAMPLES:
        _EXAMPLES[name] = _load_json_file(EXAMPLE_DIR / EXAMPLE_FILES[name])
    return _EXAMPLES[name]


def validate(name: str, instance: Any) -> None:
    """Raise :class:`SchemaValidationError` for the most relevant violation."""

    error = best_match(get_validator(name).iter_errors(instance))
    if error is not None:
        raise error
