import pytest

from backend.intake.utils.error_handlers import ValidationError
from backend.intake.utils.validation import clean_email, clean_full_name, clean_linkedin, clean_phone


def test_full_name_is_trimmed():
    assert clean_full_name("  Ada Lovelace ") == "Ada Lovelace"


@pytest.mark.parametrize("value", [None, "", "   \t"])
def test_full_name_required(value):
    with pytest.raises(ValidationError) as exc:
        clean_full_name(value)
    assert exc.value.message == "Full name is required"
    assert exc.value.status_code == 400


def test_email_normalized():
    assert clean_email("  Jane.Doe@Example.COM ") == "jane.doe@example.com"


@pytest.mark.parametrize(
    "value,message",
    [
        (None, "Email is required"),
        ("  ", "Email is required"),
        ("jane", "Invalid email format"),
        ("jane@example", "Invalid email format"),
        ("ja ne@example.com", "Invalid email format"),
        ("jane@@example.com", "Invalid email format"),
    ],
)
def test_email_rejected(value, message):
    with pytest.raises(ValidationError) as exc:
        clean_email(value)
    assert exc.value.message == message
    assert exc.value.field == "email"


def test_phone_accepts_ten_digits_and_trims():
    assert clean_phone("1234567890") == "1234567890"
    assert clean_phone(" 1234567890 ") == "1234567890"


@pytest.mark.parametrize("value", ["123456789", "12345678901", "123-456-7890", "(123)4567890", "１２３４５６７８９０"])
def test_phone_format(value):
    with pytest.raises(ValidationError) as exc:
        clean_phone(value)
    assert exc.value.message == "Phone number must be exactly 10 digits"


def test_phone_required():
    with pytest.raises(ValidationError) as exc:
        clean_phone("")
    assert exc.value.message == "Phone number is required"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_linkedin_optional(value):
    assert clean_linkedin(value) is None


def test_linkedin_case_insensitive_marker():
    assert clean_linkedin(" HTTPS://WWW.LINKEDIN.COM/IN/Ada ") == "HTTPS://WWW.LINKEDIN.COM/IN/Ada"


@pytest.mark.parametrize("value", ["https://linkedin.com/company/acme", "https://example.com/in/ada"])
def test_linkedin_rejected(value):
    with pytest.raises(ValidationError) as exc:
        clean_linkedin(value)
    assert exc.value.message == "Invalid LinkedIn URL format"
