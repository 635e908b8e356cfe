# app/validation.py
"""
Declarative request validation.

Each route declares an ordered list of :class:`Rule` objects, one per field.
A rule holds the field's location (path params or JSON body) and an ordered
tuple of :class:`Check` objects, each a predicate plus the message reported
when it fails. :func:`check_rules` runs every check of every rule and returns
the failures; :func:`validate` wraps that into a FastAPI dependency that
either hands the route a :class:`ValidatedRequest` or raises
:class:`~app.errors.InputValidationError`, so the handler never runs on bad
input.

Checks look at a value's text form, the way form and query data arrive:
missing/None is the empty string, booleans are ``true``/``false``.
"""
import math
import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type

from fastapi import Request
from pydantic import BaseModel

from .errors import InputValidationError

PARAMS = "params"
BODY = "body"

INVALID_JSON_MESSAGE = "JSON no válido"

_INT_RE = re.compile(r"^[-+]?[0-9]+$")
_NUMERIC_RE = re.compile(r"^[+-]?([0-9]*[.])?[0-9]+$")
_BOOLEAN_TEXT = frozenset({"true", "false", "1", "0"})

_MISSING = object()


def as_text(value: Any) -> str:
    if value is None or value is _MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# Predicates

def is_int(value: Any) -> bool:
    return bool(_INT_RE.match(as_text(value)))


def is_numeric(value: Any) -> bool:
    return bool(_NUMERIC_RE.match(as_text(value)))


def not_empty(value: Any) -> bool:
    return as_text(value) != ""


def is_positive(value: Any) -> bool:
    try:
        number = float(as_text(value))
    except ValueError:
        return False
    # digit strings too long for a float parse as inf
    return math.isfinite(number) and number > 0


def is_boolean(value: Any) -> bool:
    return as_text(value) in _BOOLEAN_TEXT


def is_string(value: Any) -> bool:
    # absence is reported by not_empty
    return value is None or value is _MISSING or isinstance(value, str)


# Check factories bound to column sizes

def max_length(limit: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        # non-strings are reported by is_string
        return not isinstance(value, str) or len(value) <= limit

    return check


def fits_decimal(precision: int, scale: int) -> Callable[[Any], bool]:
    """
    Value still positive and in range once rounded to a NUMERIC(precision, scale).

    Non-numeric and non-positive input passes here; is_numeric and is_positive
    report those.
    """
    step = Decimal(1).scaleb(-scale)
    ceiling = Decimal(10) ** (precision - scale)
    largest = ceiling - step

    def check(value: Any) -> bool:
        try:
            number = Decimal(as_text(value))
        except InvalidOperation:
            return True
        if not number.is_finite() or number <= 0:
            return True
        if number >= ceiling:
            return False
        rounded = number.quantize(step, rounding=ROUND_HALF_UP)
        return step <= rounded <= largest

    return check


def _json_safe(value: Any) -> Any:
    # JSON has no inf/nan; echo those back as text
    if isinstance(value, float) and not math.isfinite(value):
        return as_text(value)
    return value


@dataclass(frozen=True)
class Check:
    predicate: Callable[[Any], bool]
    message: str


@dataclass(frozen=True)
class Rule:
    field: str
    location: str
    checks: Tuple[Check, ...]
    kind: str = "string"
    optional: bool = False
    description: Optional[str] = None

    def run(self, source: Dict[str, Any]) -> List[Dict[str, Any]]:
        value = source.get(self.field, _MISSING)
        if self.optional and value is _MISSING:
            return []

        failures = []
        for check in self.checks:
            if check.predicate(value):
                continue
            item: Dict[str, Any] = {"type": "field"}
            if value is not _MISSING:
                item["value"] = _json_safe(value)
            item.update(msg=check.message, path=self.field, location=self.location)
            failures.append(item)
        return failures


@dataclass
class ValidatedRequest:
    params: Dict[str, Any] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)

    def int_param(self, name: str) -> int:
        return int(self.params[name])


def check_rules(rules: Sequence[Rule], params: Dict[str, Any], body: Dict[str, Any]) -> List[Dict[str, Any]]:
    sources = {PARAMS: params, BODY: body}
    errors: List[Dict[str, Any]] = []
    for rule in rules:
        errors.extend(rule.run(sources[rule.location]))
    return errors


async def read_json_body(request: Request) -> Dict[str, Any]:
    if not (await request.body()).strip():
        return {}
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        raise InputValidationError([{"type": "body", "msg": INVALID_JSON_MESSAGE, "location": BODY}])
    return body


def validate(*rules: Rule) -> Callable:
    """Build a dependency that runs ``rules`` against the incoming request."""
    needs_body = any(rule.location == BODY for rule in rules)

    async def dependency(request: Request) -> ValidatedRequest:
        params = dict(request.path_params)
        body = await read_json_body(request) if needs_body else {}

        errors = check_rules(rules, params, body)
        if errors:
            raise InputValidationError(errors)
        return ValidatedRequest(params=params, body=body)

    return dependency


def openapi_extra(rules: Sequence[Rule], body_model: Optional[Type[BaseModel]] = None) -> Dict[str, Any]:
    """OpenAPI fragments for a route whose inputs are read by :func:`validate`."""
    extra: Dict[str, Any] = {}
    parameters = [
        {
            "in": "path",
            "name": rule.field,
            "required": True,
            "description": rule.description or "",
            "schema": {"type": rule.kind},
        }
        for rule in rules
        if rule.location == PARAMS
    ]
    if parameters:
        extra["parameters"] = parameters
    if body_model is not None:
        extra["requestBody"] = {
            "required": True,
            "content": {"application/json": {"schema": body_model.model_json_schema()}},
        }
    return extra
