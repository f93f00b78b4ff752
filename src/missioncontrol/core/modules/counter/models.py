"""Monotonic identity counters."""

from enum import StrEnum

from pydantic import Field

from missioncontrol.core.db import MongoModel


class CounterType(StrEnum):
    """Entity kinds that receive sequential integer ids."""

    USER = "user"
    ASTRONAUT = "astronaut"
    MISSION = "mission"


class Counter(MongoModel):
    """Sequence for one entity kind, stored with the counter type as _id."""

    id: CounterType = Field(alias="_id", serialization_alias="id")
    seq: int = 0  # Last issued value; next id will be seq + 1
