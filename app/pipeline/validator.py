# =============================================================================
# app/pipeline/validator.py - Declarative Field Validation
# =============================================================================
# A route declares an ordered list of FieldRules:
#
#   FieldRule("price", IsNumber(min=0, message="Price must be a positive number"))
#   FieldRule("page", IsInteger(min=1), location=Location.QUERY, optional=True)
#
# validate(*rules) turns them into a pipeline stage. Every rule is checked;
# each field reports its first failing check. Any failure halts with 400:
#
#   {"success": false, "message": "Validation failed",
#    "errors": [{"field": "price", "message": "...", "value": -1}]}
# =============================================================================

import math
import re
from enum import Enum
from typing import Any, Callable, Iterable

from email_validator import EmailNotValidError, validate_email

from app.exceptions import envelope_response
from core.models import FieldError
from lib.utils import is_valid_url

from .context import CONTINUE, Halt, RequestContext, Stage, StageResult

_MISSING = object()
_INTEGER = re.compile(r"^[+-]?\d+$")


class Location(str, Enum):
    """Where a field is read from."""
    BODY = "body"
    QUERY = "query"
    PARAM = "param"


# =============================================================================
# Checks
# =============================================================================

class Check:
    """A single predicate with the message reported when it fails."""

    default_message = "Invalid value"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message

    def passes(self, value: Any) -> bool:
        raise NotImplementedError

    def __call__(self, value: Any) -> str | None:
        """Return the failure message, or None if the value passes."""
        return None if self.passes(value) else self.message


class Length(Check):
    def __init__(self, min: int | None = None, max: int | None = None, message: str | None = None):
        self.min = min
        self.max = max
        super().__init__(message or f"Length must be between {min or 0} and {max or 'any'} characters")

    def passes(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        if self.min is not None and len(value) < self.min:
            return False
        return self.max is None or len(value) <= self.max


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        # OverflowError: JSON integers beyond the float range
        return None
    return number if math.isfinite(number) else None


class IsNumber(Check):
    """Float (or numeric string) within optional bounds."""

    default_message = "Must be a number"

    def __init__(self, min: float | None = None, max: float | None = None, message: str | None = None):
        self.min = min
        self.max = max
        super().__init__(message)

    def passes(self, value: Any) -> bool:
        number = _to_number(value)
        if number is None:
            return False
        if self.min is not None and number < self.min:
            return False
        return self.max is None or number <= self.max


class IsInteger(IsNumber):
    """Integer (or integer string) within optional bounds."""

    default_message = "Must be an integer"

    def passes(self, value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, str) and not _INTEGER.match(value):
            return False
        if isinstance(value, float) and not value.is_integer():
            return False
        return super().passes(value)


class Matches(Check):
    default_message = "Invalid format"

    def __init__(self, pattern: str, message: str | None = None):
        self.pattern = re.compile(pattern)
        super().__init__(message)

    def passes(self, value: Any) -> bool:
        return isinstance(value, str) and self.pattern.search(value) is not None


class OneOf(Check):
    def __init__(self, values: Iterable[str], message: str | None = None):
        self.values = tuple(values)
        super().__init__(message or f"Must be one of: {', '.join(self.values)}")

    def passes(self, value: Any) -> bool:
        return value in self.values


class IsEmail(Check):
    default_message = "Please provide a valid email address"

    def passes(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True


class IsUrl(Check):
    default_message = "Must be a valid URL"

    def passes(self, value: Any) -> bool:
        return is_valid_url(value)


class Custom(Check):
    """Wrap an arbitrary predicate."""

    def __init__(self, predicate: Callable[[Any], bool], message: str):
        self.predicate = predicate
        super().__init__(message)

    def passes(self, value: Any) -> bool:
        return bool(self.predicate(value))


# =============================================================================
# Rules
# =============================================================================

class FieldRule:
    """Checks applied, in order, to one field at one location."""

    def __init__(
        self,
        field: str,
        *checks: Check,
        location: Location = Location.BODY,
        optional: bool = False,
        label: str | None = None,
    ):
        self.field = field
        self.checks = checks
        self.location = location
        self.optional = optional
        self.label = label or field.replace("_", " ").capitalize()

    def source(self, context: RequestContext) -> dict[str, Any]:
        if self.location == Location.QUERY:
            return context.query
        if self.location == Location.PARAM:
            return context.params
        return context.body

    def evaluate(self, context: RequestContext) -> FieldError | None:
        value = self.source(context).get(self.field, _MISSING)

        if value is _MISSING:
            if self.optional:
                return None
            return FieldError(field=self.field, message=f"{self.label} is required")

        for check in self.checks:
            message = check(value)
            if message:
                return FieldError(field=self.field, message=message, value=value)
        return None


def collect_errors(rules: Iterable[FieldRule], context: RequestContext) -> list[FieldError]:
    """Evaluate every rule; return one record per failing field."""
    errors = []
    for rule in rules:
        error = rule.evaluate(context)
        if error is not None:
            errors.append(error)
    return errors


def validate(*rules: FieldRule) -> Stage:
    """Build a pipeline stage that halts with 400 when any rule fails."""

    async def validate_fields(context: RequestContext) -> StageResult:
        errors = collect_errors(rules, context)
        if errors:
            return Halt(envelope_response(400, "Validation failed", errors=errors))
        return CONTINUE

    return validate_fields
