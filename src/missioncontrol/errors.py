from abc import ABC
from enum import StrEnum


class ErrorKind(StrEnum):
    """Stable machine-readable error kinds.

    The transport layer maps kinds to protocol status codes; values never change.
    """

    # Session
    SESSION_INVALID = "session_invalid"

    # Credentials
    EMAIL_NOT_EXIST = "email_not_exist"
    PASSWORD_INCORRECT = "password_incorrect"
    OLD_PASSWORD_INCORRECT = "old_password_incorrect"

    # Ownership
    NOT_OWNER = "not_owner"

    # Field validation
    EMAIL_INVALID = "email_invalid"
    NAME_FIRST_LENGTH = "name_first_length"
    NAME_FIRST_CHARACTERS = "name_first_characters"
    NAME_LAST_LENGTH = "name_last_length"
    NAME_LAST_CHARACTERS = "name_last_characters"
    PASSWORD_TOO_SHORT = "password_too_short"
    PASSWORD_INVALID_FORMAT = "password_invalid_format"
    NEW_PASSWORD_SAME = "new_password_same"
    NEW_PASSWORD_TOO_SHORT = "new_password_too_short"
    NEW_PASSWORD_INVALID_FORMAT = "new_password_invalid_format"
    RANK_LENGTH = "rank_length"
    RANK_CHARACTERS = "rank_characters"
    RANK_CHARACTERS_UPDATE = "rank_characters_update"
    AGE_INVALID = "age_invalid"
    WEIGHT_INVALID = "weight_invalid"
    HEIGHT_INVALID = "height_invalid"
    MISSION_NAME_LENGTH = "mission_name_length"
    MISSION_NAME_CHARACTERS = "mission_name_characters"
    DESCRIPTION_TOO_LONG = "description_too_long"
    TARGET_TOO_LONG = "target_too_long"

    # Reference validation
    ASTRONAUT_ID_INVALID = "astronaut_id_invalid"
    USER_NOT_REAL = "user_not_real"
    CANNOT_TRANSFER_TO_SELF = "cannot_transfer_to_self"
    NOT_ASSIGNED = "not_assigned"

    # Uniqueness
    EMAIL_IN_USE = "email_in_use"
    NEW_PASSWORD_USED = "new_password_used"
    NAME_ALREADY_EXISTS = "name_already_exists"
    MISSION_NAME_IN_USE = "mission_name_in_use"
    NAME_COLLISION_AT_TARGET = "name_collision_at_target"
    ALREADY_ASSIGNED = "already_assigned"

    # Referential invariants
    MISSION_HAS_ASTRONAUTS = "mission_has_astronauts"
    ASTRONAUT_CURRENTLY_ASSIGNED = "astronaut_currently_assigned"

    # Internal lookups
    DOCUMENT_NOT_FOUND = "document_not_found"


ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.SESSION_INVALID: "Session is empty or invalid (does not refer to a valid logged in user session)",
    ErrorKind.EMAIL_NOT_EXIST: "Email address does not exist",
    ErrorKind.PASSWORD_INCORRECT: "Password is not correct for the given email",
    ErrorKind.OLD_PASSWORD_INCORRECT: "Old password is not the correct old password",
    ErrorKind.NOT_OWNER: "Control user is not an owner of this mission or the mission does not exist",
    ErrorKind.EMAIL_INVALID: "Email is not a valid email address",
    ErrorKind.NAME_FIRST_LENGTH: "NameFirst is less than 2 characters or more than 20 characters",
    ErrorKind.NAME_FIRST_CHARACTERS: "NameFirst contains characters other than letters, spaces, hyphens, or apostrophes",
    ErrorKind.NAME_LAST_LENGTH: "NameLast is less than 2 characters or more than 20 characters",
    ErrorKind.NAME_LAST_CHARACTERS: "NameLast contains characters other than letters, spaces, hyphens, or apostrophes",
    ErrorKind.PASSWORD_TOO_SHORT: "Password is less than 8 characters",
    ErrorKind.PASSWORD_INVALID_FORMAT: "Password does not contain at least one number and at least one letter",
    ErrorKind.NEW_PASSWORD_SAME: "Old password and new password match exactly",
    ErrorKind.NEW_PASSWORD_TOO_SHORT: "New password is less than 8 characters",
    ErrorKind.NEW_PASSWORD_INVALID_FORMAT: "New password does not contain at least one number and at least one letter",
    ErrorKind.RANK_LENGTH: "Rank is less than 5 characters or more than 50 characters",
    ErrorKind.RANK_CHARACTERS: (
        "Rank contains characters other than letters, spaces, hyphens, round brackets or apostrophes"
    ),
    ErrorKind.RANK_CHARACTERS_UPDATE: "Rank contains characters other than letters, spaces, hyphens, or apostrophes",
    ErrorKind.AGE_INVALID: "Age < 20 or > 60",
    ErrorKind.WEIGHT_INVALID: "Weight (measured in kgs at Earth gravity) > 100",
    ErrorKind.HEIGHT_INVALID: "Height (measured in cms) < 150 or > 200",
    ErrorKind.MISSION_NAME_LENGTH: "Name is either less than 3 characters long or more than 30 characters long",
    ErrorKind.MISSION_NAME_CHARACTERS: "Name contains invalid characters. Valid characters are alphanumeric and spaces",
    ErrorKind.DESCRIPTION_TOO_LONG: "Description is more than 400 characters in length",
    ErrorKind.TARGET_TOO_LONG: "Target is more than 100 characters in length",
    ErrorKind.ASTRONAUT_ID_INVALID: "Astronaut id is invalid",
    ErrorKind.USER_NOT_REAL: "userEmail is not a real control user",
    ErrorKind.CANNOT_TRANSFER_TO_SELF: "userEmail is the current logged in control user",
    ErrorKind.NOT_ASSIGNED: "The astronaut is not assigned to this mission",
    ErrorKind.EMAIL_IN_USE: "Email address is used by another user",
    ErrorKind.NEW_PASSWORD_USED: "New password has already been used before by this user",
    ErrorKind.NAME_ALREADY_EXISTS: "Another astronaut already exists with the same nameFirst and nameLast",
    ErrorKind.MISSION_NAME_IN_USE: "Name is already used by the current logged in user for another mission",
    ErrorKind.NAME_COLLISION_AT_TARGET: "Mission has a name that is already used by the target user",
    ErrorKind.ALREADY_ASSIGNED: "The astronaut is already assigned to a mission",
    ErrorKind.MISSION_HAS_ASTRONAUTS: "Astronauts have been assigned to this mission",
    ErrorKind.ASTRONAUT_CURRENTLY_ASSIGNED: "The astronaut is currently assigned to a mission",
    ErrorKind.DOCUMENT_NOT_FOUND: "Document not found",
}


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information. ``kind`` is the stable identifier callers
    should branch on; the message is for humans.
    """

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        self.kind = kind
        super().__init__(message or ERROR_MESSAGES[kind])


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(ErrorKind.DOCUMENT_NOT_FOUND, message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, kind: ErrorKind = ErrorKind.SESSION_INVALID, message: str | None = None) -> None:
        super().__init__(kind, message)


class AccessDeniedError(UserError):
    """Raised when a user tries to act on a mission they do not own.

    Also raised for missions that do not exist, so callers cannot probe for existence.
    """

    def __init__(self, kind: ErrorKind = ErrorKind.NOT_OWNER, message: str | None = None) -> None:
        super().__init__(kind, message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class ConflictError(UserError):
    """Raised when a uniqueness rule would be violated."""


class InvariantViolationError(UserError):
    """Raised when deleting an entity that is still referenced."""
