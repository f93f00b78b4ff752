"""Field rules for astronauts.

Rules run in a fixed order: first name, last name, rank, age, weight, height.
The first failing rule decides the reported error kind.
"""

import math
import re
from typing import Any

from missioncontrol.core.modules.user.validators import validate_name_first, validate_name_last
from missioncontrol.errors import ErrorKind, ValidationError

RANK_MIN_LENGTH = 5
RANK_MAX_LENGTH = 50
AGE_MIN = 20
AGE_MAX = 60
WEIGHT_MAX = 100
HEIGHT_MIN = 150
HEIGHT_MAX = 200

# Round brackets are allowed when a rank is first recorded but not when it is changed
RANK_CREATE_RE = re.compile(r"[A-Za-z' ()-]+")
RANK_UPDATE_RE = re.compile(r"[A-Za-z' -]+")


def as_number(value: Any) -> int | float | None:  # noqa: ANN401
    """Coerce a numeric input to a number, or None when it is not a number.

    Whole numbers come back as int so they echo the way they were given.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return int(number) if number.is_integer() else number


def validate_rank(rank: str, for_update: bool = False) -> None:
    if not RANK_MIN_LENGTH <= len(rank) <= RANK_MAX_LENGTH:
        raise ValidationError(ErrorKind.RANK_LENGTH)
    if for_update:
        if not RANK_UPDATE_RE.fullmatch(rank):
            raise ValidationError(ErrorKind.RANK_CHARACTERS_UPDATE)
    elif not RANK_CREATE_RE.fullmatch(rank):
        raise ValidationError(ErrorKind.RANK_CHARACTERS)


def validate_age(age: Any) -> int | float:  # noqa: ANN401
    number = as_number(age)
    if number is None or not AGE_MIN <= number <= AGE_MAX:
        raise ValidationError(ErrorKind.AGE_INVALID)
    return number


def validate_weight(weight: Any) -> int | float:  # noqa: ANN401
    number = as_number(weight)
    if number is None or not 0 < number <= WEIGHT_MAX:
        raise ValidationError(ErrorKind.WEIGHT_INVALID)
    return number


def validate_height(height: Any) -> int | float:  # noqa: ANN401
    number = as_number(height)
    if number is None or not HEIGHT_MIN <= number <= HEIGHT_MAX:
        raise ValidationError(ErrorKind.HEIGHT_INVALID)
    return number


def validate_astronaut_fields(
    name_first: str | None = None,
    name_last: str | None = None,
    rank: str | None = None,
    age: Any = None,  # noqa: ANN401
    weight: Any = None,  # noqa: ANN401
    height: Any = None,  # noqa: ANN401
    for_update: bool = False,
) -> dict[str, Any]:
    """Validate the given fields in declared order and return them normalized.

    On create every field is required, so a missing field fails its rule. On
    update a None field is absent and skipped.

    Returns:
        Mapping of field name to validated value, only for fields that were given

    Raises:
        ValidationError: For the first field that fails its rule
    """
    fields: dict[str, Any] = {}

    if name_first is not None or not for_update:
        validate_name_first(name_first or "")
        fields["name_first"] = name_first
    if name_last is not None or not for_update:
        validate_name_last(name_last or "")
        fields["name_last"] = name_last
    if rank is not None or not for_update:
        validate_rank(rank or "", for_update=for_update)
        fields["rank"] = rank
    if age is not None or not for_update:
        fields["age"] = validate_age(age)
    if weight is not None or not for_update:
        fields["weight"] = validate_weight(weight)
    if height is not None or not for_update:
        fields["height"] = validate_height(height)

    return fields
