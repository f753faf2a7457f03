"""Email value object."""

from email_validator import EmailNotValidError, validate_email

from loginapp_identity.domain.user.exceptions import InvalidEmailError


class Email:
    """A syntactically valid, normalised email address.

    The whole address is lower-cased so that equality, repository lookups
    and the unique constraint are all case-insensitive.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str):
        if not isinstance(value, str) or not value.strip():
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)
        try:
            validated = validate_email(value.strip(), check_deliverability=False)
        except EmailNotValidError as e:
            raise InvalidEmailError(str(e)) from e
        self._value = validated.normalized.lower()

    @property
    def value(self) -> str:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Email):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Email({self._value!r})"
