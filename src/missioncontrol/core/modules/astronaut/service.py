from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from missioncontrol import utils
from missioncontrol.core.core import Service
from missioncontrol.core.db import SnapshotCollection
from missioncontrol.core.modules.astronaut.models import (
    AssignedMission,
    Astronaut,
    AstronautInfo,
    AstronautPoolEntry,
)
from missioncontrol.core.modules.astronaut.validators import validate_astronaut_fields
from missioncontrol.core.modules.counter.models import CounterType
from missioncontrol.errors import ConflictError, ErrorKind, InvariantViolationError, ValidationError

logger = structlog.get_logger(__name__)


class AstronautService(Service):
    """Manages the astronaut pool with in-memory cache."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        super().__init__(database)
        self._snapshot = SnapshotCollection(database, "astronauts")
        self._astronauts: dict[int, Astronaut] = {}

    async def on_start(self) -> None:
        astronauts = Astronaut.from_mongo_list(await self._snapshot.load())
        self._astronauts = {astronaut.id: astronaut for astronaut in astronauts}
        logger.debug("astronaut_service_started", astronaut_count=len(self._astronauts))

    def get_astronaut(self, astronaut_id: int) -> Astronaut:
        """Get astronaut by ID. Unknown ids are a validation failure of the request."""
        if astronaut_id not in self._astronauts:
            raise ValidationError(ErrorKind.ASTRONAUT_ID_INVALID)
        return self._astronauts[astronaut_id]

    def has_name(self, name_first: str, name_last: str, exclude_id: int | None = None) -> bool:
        """Check whether another astronaut already has this name pair, ignoring case."""
        return any(a.has_name(name_first, name_last) and a.id != exclude_id for a in self._astronauts.values())

    async def create_astronaut(
        self,
        name_first: str,
        name_last: str,
        rank: str,
        age: Any,  # noqa: ANN401
        weight: Any,  # noqa: ANN401
        height: Any,  # noqa: ANN401
    ) -> Astronaut:
        """Validate and add a new astronaut to the pool."""
        fields = validate_astronaut_fields(name_first, name_last, rank, age, weight, height)
        if self.has_name(name_first, name_last):
            raise ConflictError(ErrorKind.NAME_ALREADY_EXISTS)

        astronaut_id = await self.core.services.counter.get_next_sequence(CounterType.ASTRONAUT)
        timestamp = utils.now()
        astronaut = Astronaut(id=astronaut_id, created_at=timestamp, edited_at=timestamp, **fields)
        self._astronauts[astronaut_id] = astronaut
        await self._snapshot.save(astronaut)
        logger.info("astronaut_created", astronaut_id=astronaut_id)
        return astronaut

    async def update_astronaut(
        self,
        astronaut_id: int,
        name_first: str | None = None,
        name_last: str | None = None,
        rank: str | None = None,
        age: Any = None,  # noqa: ANN401
        weight: Any = None,  # noqa: ANN401
        height: Any = None,  # noqa: ANN401
    ) -> Astronaut:
        """Update astronaut fields. None values are left unchanged.

        Given fields are validated with the update rules; name uniqueness is
        checked against the merged name pair.
        """
        astronaut = self.get_astronaut(astronaut_id)
        fields = validate_astronaut_fields(name_first, name_last, rank, age, weight, height, for_update=True)

        new_first = fields.get("name_first", astronaut.name_first)
        new_last = fields.get("name_last", astronaut.name_last)
        if self.has_name(new_first, new_last, exclude_id=astronaut_id):
            raise ConflictError(ErrorKind.NAME_ALREADY_EXISTS)

        for key, value in fields.items():
            setattr(astronaut, key, value)
        astronaut.edited_at = utils.now()
        await self._snapshot.save(astronaut)
        return astronaut

    async def delete_astronaut(self, astronaut_id: int) -> None:
        """Remove an astronaut who is not assigned to any mission."""
        self.get_astronaut(astronaut_id)
        if self.core.services.assignment.is_assigned(astronaut_id):
            raise InvariantViolationError(ErrorKind.ASTRONAUT_CURRENTLY_ASSIGNED)

        del self._astronauts[astronaut_id]
        await self._snapshot.delete(astronaut_id)
        logger.info("astronaut_removed", astronaut_id=astronaut_id)

    def get_astronaut_info(self, astronaut_id: int) -> AstronautInfo:
        astronaut = self.get_astronaut(astronaut_id)
        assigned_mission = None
        mission_id = self.core.services.assignment.mission_of(astronaut_id)
        if mission_id is not None:
            mission = self.core.services.mission.get_mission(mission_id)
            assigned_mission = AssignedMission(mission_id=mission.id, objective=mission.objective)

        return AstronautInfo(
            astronaut_id=astronaut.id,
            designation=astronaut.designation,
            time_added=astronaut.created_at,
            time_last_edited=astronaut.edited_at,
            age=astronaut.age,
            weight=astronaut.weight,
            height=astronaut.height,
            assigned_mission=assigned_mission,
        )

    def get_pool(self) -> list[AstronautPoolEntry]:
        """List every astronaut with its assignment flag, in creation order."""
        return [
            AstronautPoolEntry(
                astronaut_id=astronaut.id,
                name=astronaut.designation,
                assigned=self.core.services.assignment.is_assigned(astronaut.id),
            )
            for astronaut in self._astronauts.values()
        ]

    async def clear(self) -> None:
        self._astronauts = {}
        await self._snapshot.clear()
