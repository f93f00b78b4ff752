import re

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from missioncontrol.errors import ErrorKind, ValidationError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 8

NAME_RE = re.compile(r"[A-Za-z' -]+")
LETTER_RE = re.compile(r"[A-Za-z]")
DIGIT_RE = re.compile(r"\d")

_email_adapter: TypeAdapter[str] = TypeAdapter(EmailStr)


def is_valid_email(email: str) -> bool:
    try:
        _email_adapter.validate_python(email)
    except PydanticValidationError:
        return False
    return True


def is_valid_password(password: str) -> bool:
    return (
        len(password) >= PASSWORD_MIN_LENGTH
        and LETTER_RE.search(password) is not None
        and DIGIT_RE.search(password) is not None
    )


def validate_email(email: str) -> None:
    if not is_valid_email(email):
        raise ValidationError(ErrorKind.EMAIL_INVALID)


def _validate_name(name: str, length_kind: ErrorKind, characters_kind: ErrorKind) -> None:
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise ValidationError(length_kind)
    if not NAME_RE.fullmatch(name):
        raise ValidationError(characters_kind)


def validate_name_first(name: str) -> None:
    """Validate a first name: 2-20 letters, spaces, hyphens or apostrophes.

    Raises:
        ValidationError: NAME_FIRST_LENGTH is checked before NAME_FIRST_CHARACTERS
    """
    _validate_name(name, ErrorKind.NAME_FIRST_LENGTH, ErrorKind.NAME_FIRST_CHARACTERS)


def validate_name_last(name: str) -> None:
    """Validate a last name with the same rules as the first name."""
    _validate_name(name, ErrorKind.NAME_LAST_LENGTH, ErrorKind.NAME_LAST_CHARACTERS)


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - Minimum length of 8 characters
    - At least one letter and at least one digit

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(ErrorKind.PASSWORD_TOO_SHORT)
    if not is_valid_password(password):
        raise ValidationError(ErrorKind.PASSWORD_INVALID_FORMAT)


def validate_new_password(password: str) -> None:
    """Same requirements as validate_password, reported with the new-password kinds."""
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(ErrorKind.NEW_PASSWORD_TOO_SHORT)
    if not is_valid_password(password):
        raise ValidationError(ErrorKind.NEW_PASSWORD_INVALID_FORMAT)
