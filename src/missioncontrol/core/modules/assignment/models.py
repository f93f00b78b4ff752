from pydantic import Field

from missioncontrol.core.db import MongoModel


class Assignment(MongoModel):
    """One astronaut assigned to one mission, stored with the astronaut id as _id.

    Keying by astronaut makes a second mission for the same astronaut
    unrepresentable.
    """

    id: int = Field(alias="_id", serialization_alias="id")  # Astronaut ID
    mission_id: int
