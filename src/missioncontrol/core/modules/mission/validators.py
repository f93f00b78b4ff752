import re

from missioncontrol.errors import ErrorKind, ValidationError

MISSION_NAME_MIN_LENGTH = 3
MISSION_NAME_MAX_LENGTH = 30
DESCRIPTION_MAX_LENGTH = 400
TARGET_MAX_LENGTH = 100

MISSION_NAME_RE = re.compile(r"[A-Za-z0-9 ]+")


def validate_mission_name(name: str) -> None:
    """Validate a mission name: 3-30 letters, digits or spaces, not only spaces.

    Raises:
        ValidationError: MISSION_NAME_LENGTH is checked before MISSION_NAME_CHARACTERS
    """
    if not MISSION_NAME_MIN_LENGTH <= len(name) <= MISSION_NAME_MAX_LENGTH:
        raise ValidationError(ErrorKind.MISSION_NAME_LENGTH)
    if not MISSION_NAME_RE.fullmatch(name) or not name.strip():
        raise ValidationError(ErrorKind.MISSION_NAME_CHARACTERS)


def validate_description(description: str) -> None:
    # Empty descriptions are fine
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(ErrorKind.DESCRIPTION_TOO_LONG)


def validate_target(target: str) -> None:
    if len(target) > TARGET_MAX_LENGTH:
        raise ValidationError(ErrorKind.TARGET_TOO_LONG)
