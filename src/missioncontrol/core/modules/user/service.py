from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from missioncontrol.core.core import Service
from missioncontrol.core.db import SnapshotCollection
from missioncontrol.core.modules.counter.models import CounterType
from missioncontrol.core.modules.user.models import User
from missioncontrol.core.modules.user.passwords import check_password, hash_password
from missioncontrol.errors import NotFoundError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Manages control users with in-memory cache."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        super().__init__(database)
        self._snapshot = SnapshotCollection(database, "users")
        self._users: dict[int, User] = {}

    def get_user(self, user_id: int) -> User:
        """Get user by ID from cache."""
        if user_id not in self._users:
            raise NotFoundError(f"User '{user_id}' not found")
        return self._users[user_id]

    def has_user(self, user_id: int) -> bool:
        """Check if user exists by ID."""
        return user_id in self._users

    def find_by_email(self, email: str) -> User | None:
        """Find user by exact email match."""
        return next((u for u in self._users.values() if u.email == email), None)

    def has_email(self, email: str, exclude_user_id: int | None = None) -> bool:
        """Check if any user other than exclude_user_id uses the email."""
        return any(u.email == email and u.id != exclude_user_id for u in self._users.values())

    async def create_user(self, email: str, password: str, name_first: str, name_last: str) -> User:
        """Create user with hashed password. Input must already be validated."""
        password_hash = hash_password(password, self.core.config.bcrypt_rounds)
        user_id = await self.core.services.counter.get_next_sequence(CounterType.USER)
        user = User(
            id=user_id,
            email=email,
            password_hash=password_hash,
            name_first=name_first,
            name_last=name_last,
            password_history=[password_hash],
        )
        self._users[user_id] = user
        await self._snapshot.save(user)
        logger.info("user_created", user_id=user_id)
        return user

    async def update_user(
        self,
        user_id: int,
        email: str | None = None,
        name_first: str | None = None,
        name_last: str | None = None,
    ) -> User:
        """Update user details. None values are left unchanged."""
        user = self.get_user(user_id)
        if email is not None:
            user.email = email
        if name_first is not None:
            user.name_first = name_first
        if name_last is not None:
            user.name_last = name_last
        await self._snapshot.save(user)
        return user

    def verify_password(self, user_id: int, password: str) -> bool:
        """Verify password against the user's current hash."""
        return check_password(password, self.get_user(user_id).password_hash)

    def is_password_reused(self, user_id: int, password: str) -> bool:
        """Check the password against every hash the user has ever had."""
        return any(check_password(password, old_hash) for old_hash in self.get_user(user_id).password_history)

    async def change_password(self, user_id: int, new_password: str) -> None:
        """Replace the password hash and append it to the history. Checks are the caller's job."""
        user = self.get_user(user_id)
        password_hash = hash_password(new_password, self.core.config.bcrypt_rounds)
        user.password_hash = password_hash
        user.password_history.append(password_hash)
        await self._snapshot.save(user)
        logger.info("user_password_changed", user_id=user_id)

    async def record_login_success(self, user_id: int) -> None:
        user = self.get_user(user_id)
        user.num_successful_logins += 1
        user.num_failed_passwords_since_last_login = 0
        await self._snapshot.save(user)

    async def record_login_failure(self, user_id: int) -> None:
        user = self.get_user(user_id)
        user.num_failed_passwords_since_last_login += 1
        await self._snapshot.save(user)
        logger.info("user_login_failed", user_id=user_id, failures=user.num_failed_passwords_since_last_login)

    async def on_start(self) -> None:
        """Load users cache from the snapshot."""
        users = User.from_mongo_list(await self._snapshot.load())
        self._users = {user.id: user for user in users}
        logger.debug("user_service_started", user_count=len(self._users))

    async def clear(self) -> None:
        self._users = {}
        await self._snapshot.clear()
