"""
Declarative request validation.

Each route declares one marshmallow schema per request location (``path``,
``query``, ``body``, ``files``). Every location is checked before the handler
runs; failures from all locations are collected into a single
:class:`marshmallow.ValidationError` keyed ``location -> field -> messages``,
which the app renders as a 422 problem document. The handler receives the
loaded values as keyword arguments named after the locations, and never runs
when anything failed.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from flask import request
from marshmallow import Schema, ValidationError

F = TypeVar("F", bound=Callable[..., Any])

LOCATIONS = ("path", "query", "body", "files")
FORM_MIMETYPES = ("multipart/form-data", "application/x-www-form-urlencoded")

SchemaLike = Schema | type[Schema]


@dataclass(slots=True)
class GateResult:
    """Outcome of checking one request against its declared schemas."""

    data: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, Any] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors


def _instance(schema: SchemaLike) -> Schema:
    return schema() if isinstance(schema, type) else schema


def check(schemas: Mapping[str, Schema], raw: Mapping[str, Any]) -> GateResult:
    """
    Load every ``raw`` location with its schema.

    Pure: no side effects, and identical input always yields an identical
    result.

    :param schemas: Location -> schema; locations without a schema are ignored.
    :param raw: Location -> raw input (mapping, or ``None`` for an unreadable body).
    :returns: Loaded values per location, or the errors per location.
    :rtype: GateResult
    """
    result = GateResult()
    for location in LOCATIONS:
        schema = schemas.get(location)
        if schema is None:
            continue
        value = raw.get(location)
        if value is None:
            result.errors[location] = {"_schema": ["Request body must be a JSON object."]}
            continue
        try:
            result.data[location] = schema.load(value)
        except ValidationError as err:
            result.errors[location] = err.normalized_messages()
    return result


def _raw_body() -> Any:
    """JSON object, form fields for form posts, ``{}`` when empty, ``None`` when unreadable."""
    if request.mimetype in FORM_MIMETYPES:
        return request.form
    if not request.get_data(cache=True).strip():
        return {}
    return request.get_json(silent=True)


def validate_request(
    *,
    path: SchemaLike | None = None,
    query: SchemaLike | None = None,
    body: SchemaLike | None = None,
    files: SchemaLike | None = None,
) -> Callable[[F], F]:
    """
    Attach per-location schemas to a view function.

    URL variables are replaced by the loaded ``path`` mapping, so handlers
    declare ``path``/``query``/``body``/``files`` parameters only for the
    locations they validate.

    :raises marshmallow.ValidationError: With every failure, keyed by location.
    """
    declared = {
        location: _instance(schema)
        for location, schema in (("path", path), ("query", query), ("body", body), ("files", files))
        if schema is not None
    }

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **view_args: Any):
            readers: dict[str, Callable[[], Any]] = {
                "path": lambda: view_args,
                "query": lambda: request.args,
                "body": _raw_body,
                "files": lambda: request.files,
            }
            raw = {location: readers[location]() for location in declared}
            result = check(declared, raw)
            if not result.valid:
                raise ValidationError(result.errors)
            return func(*args, **result.data)

        wrapper.request_schemas = declared  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator
