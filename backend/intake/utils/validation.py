"""
Field validation for application submissions.

Every helper trims its input, raises ValidationError with the field's message
on the first violation, and returns the value exactly as it should be stored.
"""
import re

from .error_handlers import ValidationError, get_error_message

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[0-9]{10}$")
LINKEDIN_MARKER = "linkedin.com/in/"


def clean_full_name(value: str | None) -> str:
    full_name = (value or "").strip()
    if not full_name:
        raise ValidationError(get_error_message("full_name_required"), field="fullName")
    return full_name


def clean_email(value: str | None) -> str:
    """Validate email shape; returns it trimmed and lower-cased."""
    email = (value or "").strip()
    if not email:
        raise ValidationError(get_error_message("email_required"), field="email")
    if not EMAIL_PATTERN.match(email):
        raise ValidationError(get_error_message("email_invalid"), field="email")
    return email.lower()


def clean_phone(value: str | None) -> str:
    phone = (value or "").strip()
    if not phone:
        raise ValidationError(get_error_message("phone_required"), field="phone")
    if not PHONE_PATTERN.match(phone):
        raise ValidationError(get_error_message("phone_invalid"), field="phone")
    return phone


def clean_linkedin(value: str | None) -> str | None:
    """Optional; empty means absent."""
    linkedin = (value or "").strip()
    if not linkedin:
        return None
    if LINKEDIN_MARKER not in linkedin.lower():
        raise ValidationError(get_error_message("linkedin_invalid"), field="linkedin")
    return linkedin
