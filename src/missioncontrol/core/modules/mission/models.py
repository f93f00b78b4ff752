"""Mission models."""

from datetime import datetime

from pydantic import BaseModel, Field

from missioncontrol.core.db import MongoModel


class Mission(MongoModel):
    """Space mission owned by one control user.

    Names are unique per owner only. Assigned astronauts live in the
    assignment relation, not on the mission.
    """

    name: str
    description: str = ""
    target: str = ""
    owner_id: int
    created_at: datetime
    edited_at: datetime

    @property
    def objective(self) -> str:
        return f"[{self.target}] {self.name}"


class MissionAstronaut(BaseModel):
    """Astronaut listed on a mission."""

    astronaut_id: int
    name: str = Field(..., description="Rank, first name and last name")


class MissionInfo(BaseModel):
    """Mission details (API representation)."""

    mission_id: int = Field(..., description="Mission ID")
    name: str
    time_created: datetime
    time_last_edited: datetime
    description: str
    target: str
    assigned_astronauts: list[MissionAstronaut] = Field(default_factory=list, description="In assignment order")


class MissionSummary(BaseModel):
    """One row of the mission listing."""

    mission_id: int
    name: str
