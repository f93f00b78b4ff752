import secrets
from datetime import timedelta
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from missioncontrol import utils
from missioncontrol.core.core import Service
from missioncontrol.core.db import SnapshotCollection
from missioncontrol.core.modules.session.models import AuthToken, Session

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Service for managing control user sessions.

    Expiry is checked lazily: an expired session is evicted the next time its
    token is resolved.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        super().__init__(database)
        self._snapshot = SnapshotCollection(database, "sessions")
        self._sessions: dict[str, Session] = {}

    async def on_start(self) -> None:
        """Load sessions from the snapshot and drop the ones that can no longer resolve."""
        sessions = Session.from_mongo_list(await self._snapshot.load())
        self._sessions = {session.id: session for session in sessions}
        purged = await self.purge_expired_sessions()
        logger.debug("session_service_started", session_count=len(self._sessions), purged=purged)

    async def create_session(self, user_id: int) -> AuthToken:
        auth_token = AuthToken(secrets.token_urlsafe(32))
        created_at = utils.now()
        session = Session(
            id=auth_token,
            user_id=user_id,
            created_at=created_at,
            expires_at=created_at + timedelta(hours=self.core.config.session_ttl_hours),
            last_activity=created_at,
        )
        self._sessions[auth_token] = session
        await self._snapshot.save(session)
        return auth_token

    def get_session(self, auth_token: AuthToken) -> Session | None:
        return self._sessions.get(auth_token)

    async def resolve_session(self, auth_token: AuthToken | None) -> int | None:
        """Return the user id behind a live session, or None.

        Evicts the session when it has expired or its user no longer exists.
        Refreshes last_activity but never extends expires_at.
        """
        if not auth_token:
            return None
        session = self.get_session(auth_token)
        if session is None:
            return None

        current_time = utils.now()
        if current_time > session.expires_at or not self.core.services.user.has_user(session.user_id):
            await self.destroy_session(auth_token)
            return None

        session.last_activity = current_time
        await self._snapshot.save(session)
        return session.user_id

    async def destroy_session(self, auth_token: AuthToken) -> bool:
        """Remove a session. Returns False if the token was unknown."""
        if self._sessions.pop(auth_token, None) is None:
            return False
        await self._snapshot.delete(auth_token)
        return True

    async def purge_expired_sessions(self) -> int:
        """Remove every expired session and return how many were removed."""
        current_time = utils.now()
        expired = [token for token, session in self._sessions.items() if current_time > session.expires_at]
        for token in expired:
            await self.destroy_session(AuthToken(token))
        return len(expired)

    async def clear(self) -> None:
        self._sessions = {}
        await self._snapshot.clear()
