import re
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Same shape the registration form accepts; both patterns must match the whole value
EMAIL_PATTERN = re.compile(
    r"^(?!\.)(?!.*\.\.)([A-Z0-9_'+\-\.]*)[A-Z0-9_+-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}",
    re.IGNORECASE,
)
PHONE_PATTERN = r"[\d \-\+\(\)]+"

COURSES: Tuple[str, ...] = (
    "Computer Science",
    "Information Technology",
    "Data Science",
    "Cybersecurity",
    "Software Engineering",
    "Artificial Intelligence",
    "Web Development",
    "Mobile Development",
    "Cloud Computing",
    "Business Administration",
)


class FieldRule(BaseModel):
    """A single constraint on a payload field."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["min_length", "pattern", "email"]
    message: str
    min_length: int = 0
    pattern: Optional[str] = None


class FieldViolation(BaseModel):
    """First failing rule for one field."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(..., description="Payload key the violation refers to")
    message: str = Field(..., description="Human-readable reason")


class StudentValidationError(Exception):
    """Raised when a student payload breaks one or more field rules."""

    def __init__(self, violations: List[FieldViolation]):
        super().__init__("; ".join(f"{v.field}: {v.message}" for v in violations))
        self.violations = violations


# Evaluated in this order; rules within a field stop at the first failure
STUDENT_FIELD_RULES: Dict[str, Tuple[FieldRule, ...]] = {
    "firstName": (
        FieldRule(
            kind="min_length",
            min_length=2,
            message="First name must be at least 2 characters",
        ),
    ),
    "lastName": (
        FieldRule(
            kind="min_length",
            min_length=2,
            message="Last name must be at least 2 characters",
        ),
    ),
    "email": (FieldRule(kind="email", message="Please enter a valid email address"),),
    "phone": (
        FieldRule(
            kind="min_length",
            min_length=10,
            message="Phone number must be at least 10 digits",
        ),
        FieldRule(
            kind="pattern",
            pattern=PHONE_PATTERN,
            message="Please enter a valid phone number",
        ),
    ),
    "course": (
        FieldRule(kind="min_length", min_length=1, message="Please select a course"),
    ),
    "enrollmentDate": (
        FieldRule(
            kind="min_length",
            min_length=1,
            message="Please select an enrollment date",
        ),
    ),
}


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _rule_passes(rule: FieldRule, value: str) -> bool:
    if rule.kind == "min_length":
        return len(value) >= rule.min_length
    if rule.kind == "pattern":
        return rule.pattern is not None and re.fullmatch(rule.pattern, value) is not None
    if rule.kind == "email":
        return EMAIL_PATTERN.fullmatch(value) is not None
    raise ValueError(f"Unknown rule kind: {rule.kind}")


def check_field(name: str, value: Any) -> Optional[FieldViolation]:
    """Return the first violation for `value` under the rules of `name`."""
    if not isinstance(value, str):
        return FieldViolation(
            field=name, message=f"Expected string, received {_type_name(value)}"
        )

    for rule in STUDENT_FIELD_RULES[name]:
        if not _rule_passes(rule, value):
            return FieldViolation(field=name, message=rule.message)
    return None


def validate_student_payload(payload: Any, partial: bool = False) -> Dict[str, str]:
    """
    Check a student payload against STUDENT_FIELD_RULES.

    With `partial=False` (create) every field is required; with `partial=True`
    (update) only the fields present are checked. Keys outside the rule table
    are dropped. Returns the normalized camelCase payload, or raises
    StudentValidationError listing every failing field.
    """
    if not isinstance(payload, dict):
        raise StudentValidationError(
            [
                FieldViolation(
                    field="body",
                    message=f"Expected object, received {_type_name(payload)}",
                )
            ]
        )

    normalized: Dict[str, str] = {}
    violations: List[FieldViolation] = []

    for name in STUDENT_FIELD_RULES:
        if name not in payload:
            if not partial:
                violations.append(FieldViolation(field=name, message="Required"))
            continue

        violation = check_field(name, payload[name])
        if violation:
            violations.append(violation)
        else:
            normalized[name] = payload[name]

    if violations:
        raise StudentValidationError(violations)

    return normalized


def validate_create_payload(payload: Any) -> Dict[str, str]:
    return validate_student_payload(payload, partial=False)


def validate_update_payload(payload: Any) -> Dict[str, str]:
    return validate_student_payload(payload, partial=True)
