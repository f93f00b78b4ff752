"""Session management models."""

from datetime import datetime
from typing import NewType

from pydantic import Field

from missioncontrol.core.db import MongoModel

AuthToken = NewType("AuthToken", str)


class Session(MongoModel):
    """Control user authentication session, stored with the auth token as _id.

    expires_at is fixed at creation; last_activity moves on every successful resolve.
    """

    id: str = Field(alias="_id", serialization_alias="id")  # The opaque auth token
    user_id: int
    created_at: datetime
    expires_at: datetime
    last_activity: datetime
