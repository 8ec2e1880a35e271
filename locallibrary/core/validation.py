"""Form Validation: per-field rules and sanitization for every mutating form.

Invariants:
    - All functions are PURE: no IO, no async, no DB, never raise on bad input
    - Every violated rule across every field is reported (no short-circuit)
    - String values are escaped whether or not they are valid, so a re-rendered
      form never echoes raw markup
    - Rules that need a non-empty value (reference shape) skip empty values:
      a missing required field yields exactly one violation
    - Optional fields treat empty/falsy input as absent (sanitized to None)

Design Decisions:
    - Rules are declarative FieldRule tuples per form, applied by one validate_fields()
    - Result is a value (ValidationResult), not framework state on the request
    - min_length runs on the trimmed value; max_length on the value as it will be
      stored (escaped when the rule escapes), so an accepted value always fits its column
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Mapping

from markupsafe import escape

from locallibrary.core.domain_types import BookInstanceStatus, is_valid_reference_token


@dataclass(frozen=True)
class FieldViolation:
    """One failed rule on one field."""
    field: str
    message: str
    value: Any = None

    def to_dict(self) -> dict:
        return {"path": self.field, "msg": self.message, "value": self.value}


@dataclass
class ValidationResult:
    """Sanitized field values plus every violation found."""
    sanitized: dict[str, Any] = field(default_factory=dict)
    violations: list[FieldViolation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def errors(self) -> list[dict]:
        """Violations in the shape the form templates iterate over."""
        return [v.to_dict() for v in self.violations]

    def fields_in_error(self) -> list[str]:
        return [v.field for v in self.violations]


@dataclass(frozen=True)
class FieldRule:
    """Declarative rule set for one form field.

    Checks run in a fixed order: optional, trim, min_length, reference,
    choices, iso_date, escape, max_length.
    """
    name: str
    message: str = "Invalid value"
    trim: bool = False
    min_length: int | None = None
    max_length: int | None = None
    max_length_message: str | None = None
    reference: bool = False
    reference_message: str | None = None
    choices: tuple[str, ...] | None = None
    choices_message: str | None = None
    iso_date: bool = False
    optional: bool = False
    escape: bool = False
    many: bool = False


# ─── Primitive sanitizers / checks ───────────────────────────────

def escape_html(value: str) -> str:
    """Escape HTML-sensitive characters (& < > " ')."""
    return str(escape(value))


_REDUCED_PRECISION_DATE = re.compile(r"^(\d{4})(?:-(\d{2}))?$")


def parse_iso_date(value: str) -> date | None:
    """Parse an ISO-8601 date or datetime string to a date, None if invalid.

    Reduced-precision dates ("2020", "2020-10") resolve to the first day
    of the year or month.
    """
    value = value.strip()
    reduced = _REDUCED_PRECISION_DATE.match(value)
    try:
        if reduced:
            year, month = reduced.groups()
            return date(int(year), int(month or 1), 1)
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def _coerce_scalar(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, (list, tuple)):
        return _coerce_scalar(raw[0]) if raw else ""
    return raw if isinstance(raw, str) else str(raw)


def _coerce_many(raw: Any) -> list[str]:
    if raw is None or raw == "":
        return []
    if isinstance(raw, (list, tuple)):
        return [_coerce_scalar(v) for v in raw]
    return [_coerce_scalar(raw)]


# ─── Rule application ────────────────────────────────────────────

def _apply_rule(rule: FieldRule, raw: str, violations: list[FieldViolation]) -> Any:
    """Run one rule against one scalar value, appending violations. Returns sanitized value."""
    if rule.optional and not raw:
        return None

    value = raw.strip() if rule.trim else raw

    if rule.min_length is not None and len(value) < rule.min_length:
        violations.append(FieldViolation(rule.name, rule.message, value))
    if rule.reference and value and not is_valid_reference_token(value):
        violations.append(FieldViolation(
            rule.name, rule.reference_message or rule.message, value,
        ))
    if rule.choices is not None and value and value not in rule.choices:
        violations.append(FieldViolation(
            rule.name, rule.choices_message or rule.message, value,
        ))

    if rule.iso_date:
        parsed = parse_iso_date(value)
        if parsed is None:
            violations.append(FieldViolation(rule.name, rule.message, value))
        return parsed

    stored = escape_html(value) if rule.escape else value
    if rule.max_length is not None and len(stored) > rule.max_length:
        violations.append(FieldViolation(
            rule.name, rule.max_length_message or rule.message, value,
        ))
    return stored


def validate_fields(
    raw_fields: Mapping[str, Any], rules: Iterable[FieldRule],
) -> ValidationResult:
    """Apply every rule to its field and collect all violations."""
    result = ValidationResult()
    for rule in rules:
        raw = raw_fields.get(rule.name)
        if rule.many:
            values = []
            for item in _coerce_many(raw):
                sanitized = _apply_rule(rule, item, result.violations)
                if sanitized not in (None, ""):
                    values.append(sanitized)
            result.sanitized[rule.name] = values
        else:
            result.sanitized[rule.name] = _apply_rule(
                rule, _coerce_scalar(raw), result.violations,
            )
    return result


# ─── Form rule sets ──────────────────────────────────────────────

AUTHOR_FORM_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "first_name", "First name must be specified",
        trim=True, min_length=1, max_length=100,
        max_length_message="First name must not exceed 100 characters",
        escape=True,
    ),
    FieldRule(
        "family_name", "Family name must be specified",
        trim=True, min_length=1, max_length=100,
        max_length_message="Family name must not exceed 100 characters",
        escape=True,
    ),
    FieldRule("date_of_birth", "Invalid date of birth", optional=True, iso_date=True),
    FieldRule("date_of_death", "Invalid date of death", optional=True, iso_date=True),
)

GENRE_FORM_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "name", "Genre name must contain at least 3 characters.",
        trim=True, min_length=3, max_length=100,
        max_length_message="Genre name must not exceed 100 characters.",
        escape=True,
    ),
)

BOOK_FORM_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "title", "Title must not be empty.",
        trim=True, min_length=1, max_length=500,
        max_length_message="Title must not exceed 500 characters.", escape=True,
    ),
    FieldRule(
        "author", "Author must not be empty.",
        trim=True, min_length=1, reference=True,
        reference_message="Invalid author reference", escape=True,
    ),
    FieldRule("summary", "Summary must not be empty.", trim=True, min_length=1, escape=True),
    FieldRule(
        "isbn", "ISBN must not be empty",
        trim=True, min_length=1, max_length=50,
        max_length_message="ISBN must not exceed 50 characters", escape=True,
    ),
    FieldRule(
        "genre", "Invalid genre reference",
        trim=True, reference=True, escape=True, many=True,
    ),
)

BOOK_INSTANCE_FORM_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "book", "Book must be specified",
        trim=True, min_length=1, reference=True,
        reference_message="Invalid book reference", escape=True,
    ),
    FieldRule(
        "imprint", "Imprint must be specified",
        trim=True, min_length=1, max_length=500,
        max_length_message="Imprint must not exceed 500 characters", escape=True,
    ),
    FieldRule(
        "status", choices=tuple(s.value for s in BookInstanceStatus),
        choices_message="Invalid status", escape=True,
    ),
    FieldRule("due_back", "Invalid date", optional=True, iso_date=True),
)


def validate_author_form(raw_fields: Mapping[str, Any]) -> ValidationResult:
    return validate_fields(raw_fields, AUTHOR_FORM_RULES)


def validate_genre_form(raw_fields: Mapping[str, Any]) -> ValidationResult:
    return validate_fields(raw_fields, GENRE_FORM_RULES)


def validate_book_form(raw_fields: Mapping[str, Any]) -> ValidationResult:
    return validate_fields(raw_fields, BOOK_FORM_RULES)


def validate_book_instance_form(raw_fields: Mapping[str, Any]) -> ValidationResult:
    """Same rules for create and update."""
    return validate_fields(raw_fields, BOOK_INSTANCE_FORM_RULES)
