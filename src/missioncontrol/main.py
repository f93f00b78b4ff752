"""Application entry point for embedding Mission Control in a transport layer."""

from missioncontrol.app import App
from missioncontrol.config import Config
from missioncontrol.logging import setup_logging


def create_app(config: Config | None = None) -> App:
    """Configure logging and build the application from the environment."""
    config = config or Config()
    setup_logging(config.debug)
    return App(config)
