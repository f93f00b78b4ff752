from pydantic import BaseModel, Field

from missioncontrol.core.db import MongoModel


class User(MongoModel):
    """Control user with credentials and login statistics."""

    email: str
    password_hash: str  # bcrypt hash
    name_first: str
    name_last: str
    num_successful_logins: int = 1  # Registration counts as the first login
    num_failed_passwords_since_last_login: int = 0
    password_history: list[str] = Field(default_factory=list)  # Every hash ever used, current one included


class UserDetails(BaseModel):
    """Control user account information (API representation)."""

    user_id: int = Field(..., description="Control user ID")
    name: str = Field(..., description="First and last name separated by a space")
    email: str = Field(..., description="Email address")
    num_successful_logins: int = Field(..., description="Successful logins, registration included")
    num_failed_passwords_since_last_login: int = Field(..., description="Wrong passwords since the last successful login")

    @classmethod
    def from_domain(cls, user: User) -> "UserDetails":
        """Create view model from domain model."""
        return cls(
            user_id=user.id,
            name=f"{user.name_first} {user.name_last}",
            email=user.email,
            num_successful_logins=user.num_successful_logins,
            num_failed_passwords_since_last_login=user.num_failed_passwords_since_last_login,
        )


class Registration(BaseModel):
    """Result of registering a control user; the user is logged in straight away."""

    user_id: int
    auth_token: str
