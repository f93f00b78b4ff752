"""Astronaut models."""

from datetime import datetime

from pydantic import BaseModel, Field

from missioncontrol.core.db import MongoModel


class Astronaut(MongoModel):
    """Astronaut in the shared pool. Not owned by any control user."""

    name_first: str
    name_last: str
    rank: str
    age: int | float
    weight: int | float  # kg at Earth gravity
    height: int | float  # cm
    created_at: datetime
    edited_at: datetime

    @property
    def designation(self) -> str:
        return f"{self.rank} {self.name_first} {self.name_last}"

    def has_name(self, name_first: str, name_last: str) -> bool:
        """Case-insensitive name pair comparison."""
        return self.name_first.lower() == name_first.lower() and self.name_last.lower() == name_last.lower()


class AssignedMission(BaseModel):
    """Mission an astronaut is currently assigned to."""

    mission_id: int = Field(..., description="Mission ID")
    objective: str = Field(..., description="Mission target in brackets followed by mission name")


class AstronautInfo(BaseModel):
    """Astronaut details (API representation)."""

    astronaut_id: int = Field(..., description="Astronaut ID")
    designation: str = Field(..., description="Rank, first name and last name")
    time_added: datetime
    time_last_edited: datetime
    age: int | float
    weight: int | float
    height: int | float
    assigned_mission: AssignedMission | None = Field(None, description="Current mission, if any")


class AstronautPoolEntry(BaseModel):
    """One row of the astronaut pool listing."""

    astronaut_id: int
    name: str = Field(..., description="Rank, first name and last name")
    assigned: bool
