from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str | None = None  # MongoDB URL for the durable snapshot; None keeps everything in memory
    debug: bool = False
    session_ttl_hours: int = 2  # Sessions expire this long after login, activity does not extend them
    bcrypt_rounds: int = 12  # Cost factor for new password hashes

    model_config = {
        "env_file": [".env"],
        "env_prefix": "MISSIONCONTROL_",
        "extra": "ignore",
    }
