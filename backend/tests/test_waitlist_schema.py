from __future__ import annotations

import pytest

from core.exceptions import WaitlistValidationError
from schemas.waitlist import validate_waitlist_entry


def _fields(exc_info) -> set[str]:
    return {error.field for error in exc_info.value.errors}


def test_valid_entry_is_normalized():
    entry = validate_waitlist_entry(
        {"fullName": "  Ada   Lovelace ", "email": "  Ada@Example.COM ", "company": " Analytical  Engines "}
    )
    assert entry.full_name == "Ada Lovelace"
    assert entry.email == "ada@example.com"
    assert entry.company == "Analytical Engines"


def test_company_is_optional():
    entry = validate_waitlist_entry({"fullName": "Ada Lovelace", "email": "ada@example.com"})
    assert entry.company is None


@pytest.mark.parametrize("company", ["", "   ", None])
def test_blank_company_is_absent(company):
    entry = validate_waitlist_entry({"fullName": "Ada Lovelace", "email": "ada@example.com", "company": company})
    assert entry.company is None


def test_html_is_stripped_from_text_fields():
    entry = validate_waitlist_entry(
        {"fullName": "<b>Ada</b> Lovelace", "email": "ada@example.com", "company": "<i>Engines</i>"}
    )
    assert entry.full_name == "Ada Lovelace"
    assert entry.company == "Engines"


def test_empty_full_name_is_rejected():
    with pytest.raises(WaitlistValidationError) as exc_info:
        validate_waitlist_entry({"fullName": "", "email": "x@example.com"})
    assert _fields(exc_info) == {"fullName"}


def test_whitespace_full_name_is_rejected():
    with pytest.raises(WaitlistValidationError) as exc_info:
        validate_waitlist_entry({"fullName": "   ", "email": "x@example.com"})
    assert "fullName" in _fields(exc_info)


def test_malformed_email_is_rejected():
    with pytest.raises(WaitlistValidationError) as exc_info:
        validate_waitlist_entry({"fullName": "Ada Lovelace", "email": "not-an-email"})
    assert _fields(exc_info) == {"email"}


def test_every_failing_field_is_reported():
    with pytest.raises(WaitlistValidationError) as exc_info:
        validate_waitlist_entry({"company": 42})
    assert _fields(exc_info) == {"fullName", "email", "company"}
    assert all(error.message for error in exc_info.value.errors)


def test_non_object_body_is_reported_against_body():
    with pytest.raises(WaitlistValidationError) as exc_info:
        validate_waitlist_entry(["ada@example.com"])
    assert _fields(exc_info) == {"body"}


def test_overlong_full_name_is_rejected():
    with pytest.raises(WaitlistValidationError) as exc_info:
        validate_waitlist_entry({"fullName": "a" * 121, "email": "ada@example.com"})
    assert _fields(exc_info) == {"fullName"}


def test_ampersands_are_kept_verbatim():
    entry = validate_waitlist_entry({"fullName": "Ada & Charles", "email": "ada@example.com", "company": "AT&T"})
    assert entry.full_name == "Ada & Charles"
    assert entry.company == "AT&T"


def test_length_limit_applies_to_unescaped_text():
    name = "A & B " * 20
    entry = validate_waitlist_entry({"fullName": name, "email": "ada@example.com"})
    assert entry.full_name == name.strip()


def test_snake_case_full_name_is_not_accepted():
    with pytest.raises(WaitlistValidationError) as exc_info:
        validate_waitlist_entry({"full_name": "Ada Lovelace", "email": "ada@example.com"})
    assert _fields(exc_info) == {"fullName"}
