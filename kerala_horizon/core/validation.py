"""
Form validation rules shared by the auth, user and trip planner resources.
"""
import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional


@dataclass
class ValidationRule:
    """Constraints applied to a single form field."""
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[re.Pattern] = None
    custom: Optional[Callable[[Any], Optional[str]]] = None


PATTERNS = {
    "email": re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$"),
    "phone": re.compile(r"^\+?[1-9]\d{0,15}$"),
    "url": re.compile(r"^https?://.+"),
    "indian_phone": re.compile(r"^[6-9]\d{9}$"),
    "pincode": re.compile(r"^\d{6}$"),
}

MAX_BUDGET = 10_000_000
MAX_TRAVELERS = 50
MAX_TRIP_DAYS = 365
# bcrypt only hashes the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return len(value) == 0
    return False


def parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value)).date()
    except ValueError:
        return None


def _to_number(value: Any, cast=float) -> Optional[float]:
    try:
        number = cast(value)
    except (TypeError, ValueError):
        return None
    if isinstance(number, float) and math.isnan(number):
        return None
    return number


class FormValidator:
    """Validates dictionaries of form values against per-field rules."""

    @staticmethod
    def validate_field(value: Any, rule: ValidationRule) -> Optional[str]:
        """Return an error message for the value, or None when it passes."""
        if rule.required and _is_empty(value):
            return "This field is required"

        # Optional and empty: nothing else to check
        if _is_empty(value):
            return None

        if isinstance(value, str):
            if rule.min_length is not None and len(value) < rule.min_length:
                return f"Must be at least {rule.min_length} characters long"
            if rule.max_length is not None and len(value) > rule.max_length:
                return f"Must be no more than {rule.max_length} characters long"
            if rule.pattern is not None and not rule.pattern.search(value):
                return "Invalid format"

        if rule.custom is not None:
            return rule.custom(value)

        return None

    @classmethod
    def validate_form(cls, data: dict, rules: dict[str, ValidationRule]) -> dict[str, str]:
        """Validate every field that has a rule; return {field: message}."""
        errors = {}
        for field_name, rule in rules.items():
            error = cls.validate_field(data.get(field_name), rule)
            if error:
                errors[field_name] = error
        return errors


def _check_email(value: str) -> Optional[str]:
    if not PATTERNS["email"].search(value):
        return "Please enter a valid email address"
    return None


def _check_password(value: str) -> Optional[str]:
    if len(value) < 6:
        return "Password must be at least 6 characters long"
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return f"Password must be no more than {MAX_PASSWORD_BYTES} bytes long"
    if not (re.search(r"[a-z]", value) and re.search(r"[A-Z]", value) and re.search(r"\d", value)):
        return "Password must contain at least one uppercase letter, one lowercase letter, and one number"
    return None


def _check_phone(value: str) -> Optional[str]:
    if not PATTERNS["indian_phone"].search(value):
        return "Please enter a valid 10-digit mobile number"
    return None


def _check_name(value: str) -> Optional[str]:
    if not re.fullmatch(r"[a-zA-Z\s]+", value):
        return "Name can only contain letters and spaces"
    return None


def _check_date(value: Any) -> Optional[str]:
    if parse_date(value) is None:
        return "Please enter a valid date"
    return None


def _check_future_date(value: Any) -> Optional[str]:
    parsed = parse_date(value)
    if parsed is None:
        return "Please enter a valid date"
    if parsed < date.today():
        return "Date cannot be in the past"
    return None


def _check_budget(value: Any) -> Optional[str]:
    number = _to_number(value)
    if number is None or number <= 0:
        return "Please enter a valid budget amount"
    if number > MAX_BUDGET:
        return "Budget amount seems too high"
    return None


def _check_travelers(value: Any) -> Optional[str]:
    number = _to_number(value, int)
    if number is None or number < 1:
        return "Number of travelers must be at least 1"
    if number > MAX_TRAVELERS:
        return f"Number of travelers cannot exceed {MAX_TRAVELERS}"
    return None


RULES = {
    "email": ValidationRule(required=True, custom=_check_email),
    "password": ValidationRule(required=True, custom=_check_password),
    "phone": ValidationRule(custom=_check_phone),
    "name": ValidationRule(required=True, min_length=2, max_length=50, custom=_check_name),
    "date": ValidationRule(required=True, custom=_check_date),
    "future_date": ValidationRule(required=True, custom=_check_future_date),
    "budget": ValidationRule(required=True, custom=_check_budget),
    "travelers": ValidationRule(required=True, custom=_check_travelers),
}


def validate_registration(data: dict) -> dict[str, str]:
    """Validate a sign-up form."""
    rules = {
        "email": RULES["email"],
        "password": RULES["password"],
        "name": RULES["name"],
        "phone": RULES["phone"],
    }
    return FormValidator.validate_form(data, rules)


def validate_trip_plan(data: dict) -> dict[str, str]:
    """
    Validate a trip plan form.

    End date must be strictly after the start date and the trip cannot span
    more than a year. An explicit duration may shorten the trip but never
    outrun its dates.
    """
    start = parse_date(data.get("start_date")) if not _is_empty(data.get("start_date")) else None
    end = parse_date(data.get("end_date")) if not _is_empty(data.get("end_date")) else None

    def check_duration(value: Any) -> Optional[str]:
        days = _to_number(value, int)
        if days is None or days < 1:
            return "Duration must be at least 1 day"
        if days > MAX_TRIP_DAYS:
            return "Trip duration cannot exceed 1 year"
        if start is not None and end is not None and days > (end - start).days:
            return "Duration cannot be longer than the trip dates"
        return None

    def check_end_date(value: Any) -> Optional[str]:
        end = parse_date(value)
        if end is None:
            return "Please enter a valid end date"
        if start is None:
            return None
        if end <= start:
            return "End date must be after start date"
        if (end - start).days > MAX_TRIP_DAYS:
            return "Trip duration cannot exceed 1 year"
        return None

    rules = {
        "title": ValidationRule(required=True, min_length=3, max_length=100),
        "start_date": RULES["future_date"],
        "end_date": ValidationRule(required=True, custom=check_end_date),
        "budget": RULES["budget"],
        "travelers": RULES["travelers"],
        "duration": ValidationRule(custom=check_duration),
    }
    return FormValidator.validate_form(data, rules)
