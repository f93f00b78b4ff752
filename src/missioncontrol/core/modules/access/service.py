from missioncontrol.core.core import Service
from missioncontrol.core.modules.mission.models import Mission
from missioncontrol.core.modules.session.models import AuthToken
from missioncontrol.core.modules.user.models import User
from missioncontrol.errors import AccessDeniedError, AuthenticationError


class AccessService(Service):
    async def ensure_authenticated(self, auth_token: AuthToken | None) -> User:
        """Resolve the session to its user. Every failure is the same SESSION_INVALID error."""
        user_id = await self.core.services.session.resolve_session(auth_token)
        if user_id is None:
            raise AuthenticationError
        return self.core.services.user.get_user(user_id)

    def ensure_mission_owner(self, user: User, mission_id: int) -> Mission:
        """Ensure the user owns the mission.

        A mission that does not exist is reported exactly like one owned by
        someone else.
        """
        mission = self.core.services.mission.find_mission(mission_id)
        if mission is None or mission.owner_id != user.id:
            raise AccessDeniedError
        return mission
