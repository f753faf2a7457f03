"""Unit tests for the Email value object."""

import pytest

from loginapp_identity.domain.user import Email, InvalidEmailError


class TestEmail:
    def test_normalises_to_lower_case(self):
        assert Email("  Alice@Example.COM ").value == "alice@example.com"

    def test_equality_is_case_insensitive(self):
        assert Email("Bob@example.com") == Email("bob@EXAMPLE.com")
        assert hash(Email("Bob@example.com")) == hash(Email("bob@example.com"))

    @pytest.mark.parametrize(
        "value",
        ["", "   ", "not-an-email", "missing@", "@example.com", "a b@example.com"],
    )
    def test_invalid_addresses_rejected(self, value):
        with pytest.raises(InvalidEmailError):
            Email(value)

    def test_invalid_email_is_a_value_error(self):
        with pytest.raises(ValueError):
            Email("nope")

    def test_str_and_repr(self):
        email = Email("carol@example.com")

        assert str(email) == "carol@example.com"
        assert repr(email) == "Email('carol@example.com')"
