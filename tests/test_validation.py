"""Tests for form validation."""
from datetime import date, timedelta

from kerala_horizon.core.validation import (
    RULES,
    FormValidator,
    ValidationRule,
    validate_registration,
    validate_trip_plan,
)


def _future(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


def _trip(**overrides) -> dict:
    data = {
        "title": "Backwaters and hills",
        "start_date": _future(10),
        "end_date": _future(14),
        "budget": 40000,
        "travelers": 2,
    }
    data.update(overrides)
    return data


class TestFormValidator:
    """Test single field rules."""

    def test_required_field(self):
        rule = ValidationRule(required=True)
        assert FormValidator.validate_field("", rule) == "This field is required"
        assert FormValidator.validate_field("   ", rule) == "This field is required"
        assert FormValidator.validate_field(None, rule) == "This field is required"

    def test_optional_empty_field_passes(self):
        assert FormValidator.validate_field("", RULES["phone"]) is None

    def test_length_limits(self):
        rule = ValidationRule(min_length=3, max_length=5)
        assert FormValidator.validate_field("ab", rule) == "Must be at least 3 characters long"
        assert FormValidator.validate_field("abcdef", rule) == "Must be no more than 5 characters long"
        assert FormValidator.validate_field("abcd", rule) is None

    def test_email(self):
        assert FormValidator.validate_field("not-an-email", RULES["email"]) == "Please enter a valid email address"
        assert FormValidator.validate_field("anita@example.com", RULES["email"]) is None

    def test_password_strength(self):
        assert "at least 6" in FormValidator.validate_field("Ab1", RULES["password"])
        assert "uppercase" in FormValidator.validate_field("password1", RULES["password"])
        assert FormValidator.validate_field("Secret123", RULES["password"]) is None

    def test_password_byte_limit(self):
        assert FormValidator.validate_field("Aa1" + "x" * 69, RULES["password"]) is None
        too_long = FormValidator.validate_field("Aa1" + "x" * 80, RULES["password"])
        assert too_long == "Password must be no more than 72 bytes long"
        # Multi-byte characters count by their encoded size
        assert "72 bytes" in FormValidator.validate_field("Aa1" + "ക" * 25, RULES["password"])

    def test_indian_phone(self):
        assert FormValidator.validate_field("12345", RULES["phone"]) == "Please enter a valid 10-digit mobile number"
        assert FormValidator.validate_field("5876543210", RULES["phone"]) is not None
        assert FormValidator.validate_field("9876543210", RULES["phone"]) is None

    def test_name_letters_only(self):
        assert FormValidator.validate_field("R2D2", RULES["name"]) == "Name can only contain letters and spaces"
        assert FormValidator.validate_field("Anita Menon", RULES["name"]) is None

    def test_budget_bounds(self):
        assert FormValidator.validate_field(0, RULES["budget"]) == "Please enter a valid budget amount"
        assert FormValidator.validate_field(-5, RULES["budget"]) == "Please enter a valid budget amount"
        assert FormValidator.validate_field(20_000_000, RULES["budget"]) == "Budget amount seems too high"
        assert FormValidator.validate_field(15000, RULES["budget"]) is None

    def test_travelers_bounds(self):
        assert FormValidator.validate_field(0, RULES["travelers"]) is not None
        assert FormValidator.validate_field(51, RULES["travelers"]) is not None
        assert FormValidator.validate_field(50, RULES["travelers"]) is None

    def test_future_date(self):
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        assert FormValidator.validate_field(yesterday, RULES["future_date"]) == "Date cannot be in the past"
        assert FormValidator.validate_field(date.today().isoformat(), RULES["future_date"]) is None


class TestRegistration:
    """Test the sign-up form."""

    def test_valid_registration(self):
        errors = validate_registration({
            "email": "anita@example.com",
            "password": "Secret123",
            "name": "Anita Menon",
            "phone": "9876543210",
        })
        assert errors == {}

    def test_collects_every_error(self):
        errors = validate_registration({"email": "bad", "password": "short", "name": ""})
        assert set(errors) == {"email", "password", "name"}
        assert errors["name"] == "This field is required"


class TestTripPlanValidation:
    """Test the trip plan form."""

    def test_valid_plan(self):
        assert validate_trip_plan(_trip()) == {}

    def test_end_date_must_follow_start(self):
        errors = validate_trip_plan(_trip(end_date=_future(10)))
        assert errors["end_date"] == "End date must be after start date"

    def test_trip_cannot_exceed_a_year(self):
        errors = validate_trip_plan(_trip(end_date=_future(10 + 366)))
        assert errors["end_date"] == "Trip duration cannot exceed 1 year"

    def test_exactly_a_year_is_allowed(self):
        assert validate_trip_plan(_trip(end_date=_future(10 + 365))) == {}

    def test_duration_within_dates(self):
        assert validate_trip_plan(_trip(duration=4)) == {}
        assert validate_trip_plan(_trip(duration=2)) == {}

    def test_duration_longer_than_dates(self):
        errors = validate_trip_plan(_trip(duration=2000))
        assert errors["duration"] == "Trip duration cannot exceed 1 year"

        errors = validate_trip_plan(_trip(duration=5))
        assert errors["duration"] == "Duration cannot be longer than the trip dates"

    def test_duration_must_be_positive(self):
        errors = validate_trip_plan(_trip(duration=0))
        assert errors["duration"] == "Duration must be at least 1 day"

    def test_start_in_past(self):
        errors = validate_trip_plan(_trip(start_date=(date.today() - timedelta(days=2)).isoformat()))
        assert errors["start_date"] == "Date cannot be in the past"

    def test_missing_fields(self):
        errors = validate_trip_plan({})
        assert errors["title"] == "This field is required"
        assert errors["budget"] == "This field is required"
        assert errors["end_date"] == "This field is required"

    def test_budget_and_travelers(self):
        errors = validate_trip_plan(_trip(budget=0, travelers=60))
        assert errors["budget"] == "Please enter a valid budget amount"
        assert "travelers" in errors
