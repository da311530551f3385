"""Field-level predicates and canonicalisers for every entity.

Each ``is_valid_*`` function is a pure predicate over the raw input. Each
``clean_*`` function trims the input, checks it with the predicate and either
returns the canonical value or raises :class:`FieldValidationError`.
"""
from dataclasses import dataclass
from datetime import date, datetime
import ipaddress

from email_validator import EmailNotValidError, validate_email

from ..core.errors import FieldValidationError

MAX_LENGTH = 64
HARDWARE_NAME_MAX_LENGTH = 15
PASSWORD_MIN_LENGTH = 8
MIN_PURCHASE_DATE = date(1990, 1, 1)


@dataclass(frozen=True)
class TextRule:
    """Length bounds plus the characters allowed besides letters and digits."""

    extra: str = ""
    whitespace: bool = False
    max_length: int = MAX_LENGTH

    def allows(self, char: str) -> bool:
        if char.isalpha() or char.isdigit() or char in self.extra:
            return True
        return self.whitespace and char.isspace()

    def is_valid(self, raw) -> bool:
        if not isinstance(raw, str):
            return False
        value = raw.strip()
        if not value or len(value) > self.max_length:
            return False
        return all(self.allows(c) for c in value)


DEPARTMENT_NAME = TextRule(extra="-'", whitespace=True)
PERSON_NAME = TextRule(extra=".-'", whitespace=True)
HARDWARE_NAME = TextRule(extra="-", max_length=HARDWARE_NAME_MAX_LENGTH)
HARDWARE_MODEL = TextRule(extra=" -.'")
HARDWARE_MANUFACTURER = TextRule(extra=" -.'")
HARDWARE_TYPE = TextRule(extra=" -")
SOFTWARE_NAME = TextRule(extra=".-", whitespace=True)
SOFTWARE_VERSION = TextRule(extra=".")
SOFTWARE_MANUFACTURER = TextRule(extra=" -.'")


def _clean_text(rule: TextRule, field: str, raw, message: str) -> str:
    if not rule.is_valid(raw):
        raise FieldValidationError(field, message)
    return raw.strip()


# Departments

def is_valid_department_name(raw) -> bool:
    return DEPARTMENT_NAME.is_valid(raw)

def clean_department_name(raw) -> str:
    return _clean_text(DEPARTMENT_NAME, "name", raw,
                       "Department name must be between 1 and 64 characters and contain only letters, digits, spaces, apostrophes, and hyphens.")


# People and accounts

def is_valid_person_name(raw) -> bool:
    return PERSON_NAME.is_valid(raw)

def clean_first_name(raw) -> str:
    return _clean_text(PERSON_NAME, "first_name", raw,
                       "First name must be between 1 and 64 characters and contain only letters, digits, spaces, periods, apostrophes, and hyphens.")

def clean_last_name(raw) -> str:
    return _clean_text(PERSON_NAME, "last_name", raw,
                       "Last name must be between 1 and 64 characters and contain only letters, digits, spaces, periods, apostrophes, and hyphens.")

def is_valid_email(raw) -> bool:
    if not isinstance(raw, str):
        return False
    value = raw.strip()
    if not value or len(value) > MAX_LENGTH:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True

def clean_email(raw) -> str:
    if not is_valid_email(raw):
        raise FieldValidationError("email", "Email must be a valid email address.")
    return raw.strip()

def is_valid_password(raw) -> bool:
    return isinstance(raw, str) and PASSWORD_MIN_LENGTH <= len(raw) <= MAX_LENGTH

def check_password(raw) -> str:
    # Passwords are never trimmed
    if not is_valid_password(raw):
        raise FieldValidationError("password", "Password must be between 8 and 64 characters.")
    return raw


# Hardware

def is_valid_hardware_name(raw) -> bool:
    return HARDWARE_NAME.is_valid(raw)

def clean_hardware_name(raw) -> str:
    return _clean_text(HARDWARE_NAME, "name", raw,
                       "Name must be 15 characters or less and contain only letters, digits, and hyphens.")

def clean_hardware_model(raw) -> str:
    return _clean_text(HARDWARE_MODEL, "model", raw,
                       "Model must be 64 characters or less and contain only letters, digits, spaces, hyphens, periods, and apostrophes.")

def clean_hardware_manufacturer(raw) -> str:
    return _clean_text(HARDWARE_MANUFACTURER, "manufacturer", raw,
                       "Manufacturer must be 64 characters or less and contain only letters, digits, spaces, hyphens, periods, and apostrophes.")

def clean_hardware_type(raw) -> str:
    return _clean_text(HARDWARE_TYPE, "type", raw,
                       "Type must be 64 characters or less and contain only letters, digits, spaces, and hyphens.")

def is_valid_ip_address(raw) -> bool:
    if not isinstance(raw, str):
        return False
    try:
        ipaddress.ip_address(raw.strip())
    except ValueError:
        return False
    return True

def clean_ip_address(raw) -> str:
    if not is_valid_ip_address(raw):
        raise FieldValidationError("ip_address", "Invalid IP Address.")
    return str(ipaddress.ip_address(raw.strip()))

def _as_date(raw) -> date | None:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        try:
            return date.fromisoformat(raw.strip())
        except ValueError:
            return None
    return None

def is_valid_purchase_date(raw, today: date | None = None) -> bool:
    if raw is None:
        return True
    value = _as_date(raw)
    if value is None:
        return False
    return MIN_PURCHASE_DATE <= value <= (today or date.today())

def clean_purchase_date(raw) -> date | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    if not is_valid_purchase_date(raw):
        raise FieldValidationError("purchase_date", "Purchase date must be between 1990 and the current date.")
    return _as_date(raw)

def is_valid_notes(raw) -> bool:
    if raw is None:
        return True
    return isinstance(raw, str) and len(raw.strip()) <= MAX_LENGTH

def clean_notes(raw) -> str | None:
    if not is_valid_notes(raw):
        raise FieldValidationError("notes", "Notes must be 64 characters or less.")
    if raw is None or not raw.strip():
        return None
    return raw.strip()


# Software

def is_valid_software_name(raw) -> bool:
    return SOFTWARE_NAME.is_valid(raw)

def clean_software_name(raw) -> str:
    return _clean_text(SOFTWARE_NAME, "name", raw,
                       "Name must be between 1 and 64 characters and contain only letters, digits, spaces, periods, and hyphens.")

def is_valid_software_version(raw) -> bool:
    return SOFTWARE_VERSION.is_valid(raw)

def clean_software_version(raw) -> str:
    return _clean_text(SOFTWARE_VERSION, "version", raw,
                       "Version must be between 1 and 64 characters and contain only letters, digits, and periods.")

def is_valid_software_manufacturer(raw) -> bool:
    return SOFTWARE_MANUFACTURER.is_valid(raw)

def clean_software_manufacturer(raw) -> str:
    return _clean_text(SOFTWARE_MANUFACTURER, "manufacturer", raw,
                       "Manufacturer must be between 1 and 64 characters and contain only letters, digits, spaces, hyphens, periods, and apostrophes.")
