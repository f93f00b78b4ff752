from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from missioncontrol.config import Config
from missioncontrol.core.core import Core
from missioncontrol.core.modules.astronaut.models import AstronautInfo, AstronautPoolEntry
from missioncontrol.core.modules.mission.models import MissionInfo, MissionSummary
from missioncontrol.core.modules.mission.validators import (
    validate_description,
    validate_mission_name,
    validate_target,
)
from missioncontrol.core.modules.session.models import AuthToken
from missioncontrol.core.modules.user.models import Registration, User, UserDetails
from missioncontrol.core.modules.user.validators import (
    validate_email,
    validate_name_first,
    validate_name_last,
    validate_new_password,
    validate_password,
)
from missioncontrol.errors import AuthenticationError, ConflictError, ErrorKind, ValidationError

logger = structlog.get_logger(__name__)


class App:
    """Facade for all application operations.

    Every operation resolves the session first, then validates input, then
    checks ownership and invariants, and only then mutates. Mutating
    operations hold the core write lock for the whole sequence.
    """

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]] | None = None) -> None:
        self._core = Core(config, database)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Authentication ===
    async def register(self, email: str, password: str, name_first: str, name_last: str) -> Registration:
        """Register a control user and open a session for them."""
        email = email.strip()
        name_first = name_first.strip()
        name_last = name_last.strip()

        async with self._core.write_lock:
            if self._core.services.user.has_email(email):
                raise ConflictError(ErrorKind.EMAIL_IN_USE)
            validate_email(email)
            validate_name_first(name_first)
            validate_name_last(name_last)
            validate_password(password)

            user = await self._core.services.user.create_user(email, password, name_first, name_last)
            auth_token = await self._core.services.session.create_session(user.id)
        return Registration(user_id=user.id, auth_token=auth_token)

    async def login(self, email: str, password: str) -> AuthToken:
        """Authenticate a control user and create a session."""
        async with self._core.write_lock:
            user = self._core.services.user.find_by_email(email.strip())
            if user is None:
                raise AuthenticationError(ErrorKind.EMAIL_NOT_EXIST)
            if not self._core.services.user.verify_password(user.id, password):
                await self._core.services.user.record_login_failure(user.id)
                raise AuthenticationError(ErrorKind.PASSWORD_INCORRECT)

            await self._core.services.user.record_login_success(user.id)
            return await self._core.services.session.create_session(user.id)

    async def logout(self, auth_token: AuthToken) -> None:
        """Invalidate the session."""
        async with self._core.write_lock:
            await self._authenticate(auth_token)
            await self._core.services.session.destroy_session(auth_token)

    # === Control user ===
    async def get_user_details(self, auth_token: AuthToken) -> UserDetails:
        user = await self._authenticate(auth_token)
        return UserDetails.from_domain(user)

    async def update_user_details(
        self,
        auth_token: AuthToken,
        email: str | None = None,
        name_first: str | None = None,
        name_last: str | None = None,
    ) -> None:
        """Update the current user's email and names (partial update, None keeps the value)."""
        async with self._core.write_lock:
            user = await self._authenticate(auth_token)
            if email is not None:
                email = email.strip()
                if self._core.services.user.has_email(email, exclude_user_id=user.id):
                    raise ConflictError(ErrorKind.EMAIL_IN_USE)
                validate_email(email)
            if name_first is not None:
                name_first = name_first.strip()
                validate_name_first(name_first)
            if name_last is not None:
                name_last = name_last.strip()
                validate_name_last(name_last)

            await self._core.services.user.update_user(user.id, email, name_first, name_last)

    async def update_password(self, auth_token: AuthToken, old_password: str, new_password: str) -> None:
        """Change the current user's password. Old passwords can never be reused."""
        async with self._core.write_lock:
            user = await self._authenticate(auth_token)
            users = self._core.services.user
            if not users.verify_password(user.id, old_password):
                raise ValidationError(ErrorKind.OLD_PASSWORD_INCORRECT)
            if old_password == new_password:
                raise ValidationError(ErrorKind.NEW_PASSWORD_SAME)
            validate_new_password(new_password)
            if users.is_password_reused(user.id, new_password):
                raise ConflictError(ErrorKind.NEW_PASSWORD_USED)

            await users.change_password(user.id, new_password)

    # === Astronauts ===
    async def create_astronaut(
        self,
        auth_token: AuthToken,
        name_first: str,
        name_last: str,
        rank: str,
        age: float,
        weight: float,
        height: float,
    ) -> int:
        """Add an astronaut to the shared pool and return its id."""
        async with self._core.write_lock:
            await self._authenticate(auth_token)
            astronaut = await self._core.services.astronaut.create_astronaut(
                name_first, name_last, rank, age, weight, height
            )
        return astronaut.id

    async def get_astronaut(self, auth_token: AuthToken, astronaut_id: int) -> AstronautInfo:
        await self._authenticate(auth_token)
        return self._core.services.astronaut.get_astronaut_info(astronaut_id)

    async def update_astronaut(
        self,
        auth_token: AuthToken,
        astronaut_id: int,
        name_first: str | None = None,
        name_last: str | None = None,
        rank: str | None = None,
        age: float | None = None,
        weight: float | None = None,
        height: float | None = None,
    ) -> None:
        """Update an astronaut (partial update, None keeps the value)."""
        async with self._core.write_lock:
            await self._authenticate(auth_token)
            await self._core.services.astronaut.update_astronaut(
                astronaut_id, name_first, name_last, rank, age, weight, height
            )

    async def remove_astronaut(self, auth_token: AuthToken, astronaut_id: int) -> None:
        async with self._core.write_lock:
            await self._authenticate(auth_token)
            await self._core.services.astronaut.delete_astronaut(astronaut_id)

    async def list_astronaut_pool(self, auth_token: AuthToken) -> list[AstronautPoolEntry]:
        await self._authenticate(auth_token)
        return self._core.services.astronaut.get_pool()

    # === Missions ===
    async def create_mission(self, auth_token: AuthToken, name: str, description: str, target: str) -> int:
        """Create a mission owned by the current user and return its id."""
        async with self._core.write_lock:
            user = await self._authenticate(auth_token)
            mission = await self._core.services.mission.create_mission(user.id, name, description, target)
        return mission.id

    async def get_mission(self, auth_token: AuthToken, mission_id: int) -> MissionInfo:
        user = await self._authenticate(auth_token)
        self._core.services.access.ensure_mission_owner(user, mission_id)
        return self._core.services.mission.get_mission_info(mission_id)

    async def list_missions(self, auth_token: AuthToken) -> list[MissionSummary]:
        """List the missions owned by the current user."""
        user = await self._authenticate(auth_token)
        return self._core.services.mission.get_summaries_by_owner(user.id)

    async def remove_mission(self, auth_token: AuthToken, mission_id: int) -> None:
        """Delete an owned mission with no assigned astronauts."""
        async with self._core.write_lock:
            user = await self._authenticate(auth_token)
            self._core.services.access.ensure_mission_owner(user, mission_id)
            await self._core.services.mission.delete_mission(mission_id)

    async def update_mission_name(self, auth_token: AuthToken, mission_id: int, name: str) -> None:
        async with self._core.write_lock:
            user = await self._authenticate(auth_token)
            validate_mission_name(name)
            self._core.services.access.ensure_mission_owner(user, mission_id)
            await self._core.services.mission.update_name(mission_id, name)

    async def update_mission_description(self, auth_token: AuthToken, mission_id: int, description: str) -> None:
        async with self._core.write_lock:
            user = await self._authenticate(auth_token)
            validate_description(description)
            self._core.services.access.ensure_mission_owner(user, mission_id)
            await self._core.services.mission.update_description(mission_id, description)

    async def update_mission_target(self, auth_token: AuthToken, mission_id: int, target: str) -> None:
        async with self._core.write_lock:
            user = await self._authenticate(auth_token)
            validate_target(target)
            self._core.services.access.ensure_mission_owner(user, mission_id)
            await self._core.services.mission.update_target(mission_id, target)

    async def transfer_mission(self, auth_token: AuthToken, mission_id: int, user_email: str) -> None:
        """Hand an owned mission to the control user registered under user_email."""
        async with self._core.write_lock:
            user = await self._authenticate(auth_token)
            validate_email(user_email)
            self._core.services.access.ensure_mission_owner(user, mission_id)
            await self._core.services.mission.transfer(mission_id, user_email)

    # === Assignments ===
    async def assign_astronaut(self, auth_token: AuthToken, mission_id: int, astronaut_id: int) -> None:
        async with self._core.write_lock:
            user = await self._authenticate(auth_token)
            self._core.services.access.ensure_mission_owner(user, mission_id)
            await self._core.services.assignment.assign(mission_id, astronaut_id)

    async def unassign_astronaut(self, auth_token: AuthToken, mission_id: int, astronaut_id: int) -> None:
        async with self._core.write_lock:
            user = await self._authenticate(auth_token)
            self._core.services.access.ensure_mission_owner(user, mission_id)
            await self._core.services.assignment.unassign(mission_id, astronaut_id)

    # === Maintenance ===
    async def reset_all(self) -> None:
        """Clear all users, sessions, astronauts, missions, assignments and id counters."""
        async with self._core.write_lock:
            await self._core.services.clear_all()
        logger.info("state_reset")

    # === Private helpers ===
    async def _authenticate(self, auth_token: AuthToken | None) -> User:
        """Resolve the session to a user. Raises AuthenticationError(SESSION_INVALID)."""
        return await self._core.services.access.ensure_authenticated(auth_token)
