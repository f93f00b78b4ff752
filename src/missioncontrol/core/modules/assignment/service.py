from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from missioncontrol.core.core import Service
from missioncontrol.core.db import SnapshotCollection
from missioncontrol.core.modules.assignment.models import Assignment
from missioncontrol.errors import ConflictError, ErrorKind, ValidationError

logger = structlog.get_logger(__name__)


class AssignmentService(Service):
    """The astronaut → mission relation.

    Each astronaut maps to at most one mission; a mission's crew is every
    astronaut mapping to it, in assignment order.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        super().__init__(database)
        self._snapshot = SnapshotCollection(database, "assignments")
        self._missions_by_astronaut: dict[int, int] = {}

    async def on_start(self) -> None:
        assignments = Assignment.from_mongo_list(await self._snapshot.load())
        self._missions_by_astronaut = {a.id: a.mission_id for a in assignments}
        logger.debug("assignment_service_started", assignment_count=len(self._missions_by_astronaut))

    def mission_of(self, astronaut_id: int) -> int | None:
        return self._missions_by_astronaut.get(astronaut_id)

    def is_assigned(self, astronaut_id: int) -> bool:
        return astronaut_id in self._missions_by_astronaut

    def astronauts_of(self, mission_id: int) -> list[int]:
        return [a_id for a_id, m_id in self._missions_by_astronaut.items() if m_id == mission_id]

    async def assign(self, mission_id: int, astronaut_id: int) -> None:
        """Assign an astronaut to a mission.

        Raises:
            ValidationError: ASTRONAUT_ID_INVALID if the astronaut does not exist
            ConflictError: ALREADY_ASSIGNED whether the astronaut is on this mission or another one
        """
        self.core.services.astronaut.get_astronaut(astronaut_id)
        if astronaut_id in self._missions_by_astronaut:
            raise ConflictError(ErrorKind.ALREADY_ASSIGNED)

        self._missions_by_astronaut[astronaut_id] = mission_id
        await self._snapshot.save(Assignment(id=astronaut_id, mission_id=mission_id))
        logger.info("astronaut_assigned", mission_id=mission_id, astronaut_id=astronaut_id)

    async def unassign(self, mission_id: int, astronaut_id: int) -> None:
        """Remove an astronaut from a mission.

        Raises:
            ValidationError: ASTRONAUT_ID_INVALID if the astronaut does not exist,
                NOT_ASSIGNED if the astronaut is not on this mission
        """
        self.core.services.astronaut.get_astronaut(astronaut_id)
        if self._missions_by_astronaut.get(astronaut_id) != mission_id:
            raise ValidationError(ErrorKind.NOT_ASSIGNED)

        del self._missions_by_astronaut[astronaut_id]
        await self._snapshot.delete(astronaut_id)
        logger.info("astronaut_unassigned", mission_id=mission_id, astronaut_id=astronaut_id)

    async def clear(self) -> None:
        self._missions_by_astronaut = {}
        await self._snapshot.clear()
