from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from missioncontrol import utils
from missioncontrol.core.core import Service
from missioncontrol.core.db import SnapshotCollection
from missioncontrol.core.modules.counter.models import CounterType
from missioncontrol.core.modules.mission.models import Mission, MissionAstronaut, MissionInfo, MissionSummary
from missioncontrol.core.modules.mission.validators import (
    validate_description,
    validate_mission_name,
    validate_target,
)
from missioncontrol.errors import ConflictError, ErrorKind, InvariantViolationError, NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class MissionService(Service):
    """Manages missions with in-memory cache.

    Ownership is checked by the access service before any method here is
    called; these methods assume the caller may act on the mission.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        super().__init__(database)
        self._snapshot = SnapshotCollection(database, "missions")
        self._missions: dict[int, Mission] = {}

    async def on_start(self) -> None:
        missions = Mission.from_mongo_list(await self._snapshot.load())
        self._missions = {mission.id: mission for mission in missions}
        logger.debug("mission_service_started", mission_count=len(self._missions))

    def get_mission(self, mission_id: int) -> Mission:
        if mission_id not in self._missions:
            raise NotFoundError(f"Mission '{mission_id}' not found")
        return self._missions[mission_id]

    def find_mission(self, mission_id: int) -> Mission | None:
        return self._missions.get(mission_id)

    def get_missions_by_owner(self, owner_id: int) -> list[Mission]:
        return [mission for mission in self._missions.values() if mission.owner_id == owner_id]

    def has_name(self, owner_id: int, name: str, exclude_id: int | None = None) -> bool:
        """Check whether the owner already has another mission with this exact name."""
        return any(
            m.owner_id == owner_id and m.name == name and m.id != exclude_id for m in self._missions.values()
        )

    async def create_mission(self, owner_id: int, name: str, description: str, target: str) -> Mission:
        validate_mission_name(name)
        validate_description(description)
        validate_target(target)
        if self.has_name(owner_id, name):
            raise ConflictError(ErrorKind.MISSION_NAME_IN_USE)

        mission_id = await self.core.services.counter.get_next_sequence(CounterType.MISSION)
        timestamp = utils.now()
        mission = Mission(
            id=mission_id,
            name=name,
            description=description,
            target=target,
            owner_id=owner_id,
            created_at=timestamp,
            edited_at=timestamp,
        )
        self._missions[mission_id] = mission
        await self._snapshot.save(mission)
        logger.info("mission_created", mission_id=mission_id, owner_id=owner_id)
        return mission

    async def update_name(self, mission_id: int, name: str) -> Mission:
        mission = self.get_mission(mission_id)
        if self.has_name(mission.owner_id, name, exclude_id=mission_id):
            raise ConflictError(ErrorKind.MISSION_NAME_IN_USE)
        return await self._update(mission, name=name)

    async def update_description(self, mission_id: int, description: str) -> Mission:
        return await self._update(self.get_mission(mission_id), description=description)

    async def update_target(self, mission_id: int, target: str) -> Mission:
        return await self._update(self.get_mission(mission_id), target=target)

    async def transfer(self, mission_id: int, user_email: str) -> Mission:
        """Hand a mission to another registered control user.

        Assignments are untouched: they belong to the mission, not its owner.
        """
        mission = self.get_mission(mission_id)

        target_user = self.core.services.user.find_by_email(user_email)
        if target_user is None:
            raise ValidationError(ErrorKind.USER_NOT_REAL)
        if target_user.id == mission.owner_id:
            raise ValidationError(ErrorKind.CANNOT_TRANSFER_TO_SELF)
        if self.has_name(target_user.id, mission.name):
            raise ConflictError(ErrorKind.NAME_COLLISION_AT_TARGET)

        previous_owner_id = mission.owner_id
        mission = await self._update(mission, owner_id=target_user.id)
        logger.info(
            "mission_transferred", mission_id=mission_id, previous_owner_id=previous_owner_id, new_owner_id=target_user.id
        )
        return mission

    async def delete_mission(self, mission_id: int) -> None:
        """Delete a mission that has no assigned astronauts."""
        self.get_mission(mission_id)
        if self.core.services.assignment.astronauts_of(mission_id):
            raise InvariantViolationError(ErrorKind.MISSION_HAS_ASTRONAUTS)

        del self._missions[mission_id]
        await self._snapshot.delete(mission_id)
        logger.info("mission_removed", mission_id=mission_id)

    def get_mission_info(self, mission_id: int) -> MissionInfo:
        mission = self.get_mission(mission_id)
        astronaut_service = self.core.services.astronaut
        assigned = [
            MissionAstronaut(astronaut_id=astronaut_id, name=astronaut_service.get_astronaut(astronaut_id).designation)
            for astronaut_id in self.core.services.assignment.astronauts_of(mission_id)
        ]
        return MissionInfo(
            mission_id=mission.id,
            name=mission.name,
            time_created=mission.created_at,
            time_last_edited=mission.edited_at,
            description=mission.description,
            target=mission.target,
            assigned_astronauts=assigned,
        )

    def get_summaries_by_owner(self, owner_id: int) -> list[MissionSummary]:
        return [MissionSummary(mission_id=m.id, name=m.name) for m in self.get_missions_by_owner(owner_id)]

    async def _update(self, mission: Mission, **changes: Any) -> Mission:  # noqa: ANN401
        for key, value in changes.items():
            setattr(mission, key, value)
        mission.edited_at = utils.now()
        await self._snapshot.save(mission)
        return mission

    async def clear(self) -> None:
        self._missions = {}
        await self._snapshot.clear()
