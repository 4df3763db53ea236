"""Validation of the navigation form.

Every rule runs on every call, so the user sees all problems at once.
Messages are the German texts shown next to the form fields.
"""

import re
from datetime import date

from pydantic import TypeAdapter, ValidationError

from journey_link.models.form import (
    FIELD_DATE,
    FIELD_FROM_ADDRESS,
    FIELD_TIME,
    FieldValidation,
    FormState,
    ValidationResult,
)

ADDRESS_REQUIRED = "Bitte geben Sie eine Startadresse ein"
ADDRESS_MISSING = "Bitte geben Sie eine Adresse ein"
ADDRESS_TOO_SHORT = "Die Adresse muss mindestens 3 Zeichen lang sein"
DATE_REQUIRED = "Bitte wählen Sie ein Datum"
DATE_INVALID = "Bitte geben Sie ein gültiges Datum ein"
TIME_REQUIRED = "Bitte wählen Sie eine Uhrzeit"
TIME_INVALID = "Bitte geben Sie eine gültige Zeit im Format HH:MM ein"
STOP_NOT_SELECTED = "Bitte wählen Sie eine Haltestelle aus der Liste"

FIELD_ORDER = (FIELD_FROM_ADDRESS, FIELD_DATE, FIELD_TIME)

MIN_ADDRESS_LENGTH = 3

# 24-hour H:MM or HH:MM
TIME_PATTERN = re.compile(r"([0-1]?[0-9]|2[0-3]):[0-5][0-9]")

# pydantic's lax date parsing; whatever it accepts counts as a date
_date_adapter = TypeAdapter(date)


def parse_form_date(value: str) -> date:
    """Parse a date form value.

    Raises:
        ValueError: If the value is not a date.
    """
    try:
        return _date_adapter.validate_python(value.strip())
    except ValidationError as e:
        raise ValueError(f"Invalid date {value!r}") from e


def is_valid_time(value: str) -> bool:
    return TIME_PATTERN.fullmatch(value) is not None


def _is_date(value: str) -> bool:
    try:
        parse_form_date(value)
    except ValueError:
        return False
    return True


def validate_address(address: str) -> FieldValidation:
    """Check a free-text address before searching for it."""
    if not address or not address.strip():
        return FieldValidation(is_valid=False, message=ADDRESS_MISSING)
    if len(address.strip()) < MIN_ADDRESS_LENGTH:
        return FieldValidation(is_valid=False, message=ADDRESS_TOO_SHORT)
    return FieldValidation(is_valid=True)


def validate_date(value: str) -> FieldValidation:
    """Check a date value; an empty value is allowed."""
    if not value or not value.strip():
        return FieldValidation(is_valid=True)
    if not _is_date(value):
        return FieldValidation(is_valid=False, message=DATE_INVALID)
    return FieldValidation(is_valid=True)


def validate_time(value: str) -> FieldValidation:
    """Check a time value; an empty value is allowed."""
    if not value or not value.strip():
        return FieldValidation(is_valid=True)
    if not is_valid_time(value):
        return FieldValidation(is_valid=False, message=TIME_INVALID)
    return FieldValidation(is_valid=True)


def validate_navigation(form: FormState) -> ValidationResult:
    """Validate the whole form before building a deep link.

    Rules are checked in order fromAddress, date, time, then stop
    selection. A missing selection replaces any fromAddress message, so
    it is reported under the address field even when the address is
    also empty.

    Args:
        form: Current form state.

    Returns:
        ValidationResult with one message per failing field.
    """
    errors: dict[str, str] = {}

    if not form.from_address.strip():
        errors[FIELD_FROM_ADDRESS] = ADDRESS_REQUIRED

    if not form.date.strip():
        errors[FIELD_DATE] = DATE_REQUIRED
    elif not _is_date(form.date):
        errors[FIELD_DATE] = DATE_INVALID

    if not form.time.strip():
        errors[FIELD_TIME] = TIME_REQUIRED
    elif not is_valid_time(form.time):
        errors[FIELD_TIME] = TIME_INVALID

    if form.selected_stop is None:
        errors[FIELD_FROM_ADDRESS] = STOP_NOT_SELECTED

    ordered = {field: errors[field] for field in FIELD_ORDER if field in errors}
    first_error = next(iter(ordered.values()), "")

    return ValidationResult(is_valid=not ordered, errors=ordered, first_error=first_error)
