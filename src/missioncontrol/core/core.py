from __future__ import annotations

import asyncio
import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast
from urllib.parse import urlparse

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from missioncontrol.config import Config

logger = structlog.get_logger(__name__)


class Service:
    """Base class for services owning an in-memory collection with a durable snapshot."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    async def clear(self) -> None:
        """Drop all state held by the service, in memory and in the snapshot."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    from missioncontrol.core.modules.access.service import AccessService  # noqa: PLC0415
    from missioncontrol.core.modules.assignment.service import AssignmentService  # noqa: PLC0415
    from missioncontrol.core.modules.astronaut.service import AstronautService  # noqa: PLC0415
    from missioncontrol.core.modules.counter.service import CounterService  # noqa: PLC0415
    from missioncontrol.core.modules.mission.service import MissionService  # noqa: PLC0415
    from missioncontrol.core.modules.session.service import SessionService  # noqa: PLC0415
    from missioncontrol.core.modules.user.service import UserService  # noqa: PLC0415

    counter: CounterService
    user: UserService
    session: SessionService
    access: AccessService
    astronaut: AstronautService
    mission: MissionService
    assignment: AssignmentService

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []
        self._database = database

        # Service configuration: (attribute_name, module_path, class_name)
        # Order matters for startup - sessions are purged against loaded users,
        # assignments are loaded after the astronauts and missions they reference
        service_configs = [
            ("counter", "missioncontrol.core.modules.counter.service", "CounterService"),
            ("user", "missioncontrol.core.modules.user.service", "UserService"),
            ("session", "missioncontrol.core.modules.session.service", "SessionService"),
            ("access", "missioncontrol.core.modules.access.service", "AccessService"),
            ("astronaut", "missioncontrol.core.modules.astronaut.service", "AstronautService"),
            ("mission", "missioncontrol.core.modules.mission.service", "MissionService"),
            ("assignment", "missioncontrol.core.modules.assignment.service", "AssignmentService"),
        ]

        # Dynamically import and instantiate services
        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in reversed(self._services):
            await service.on_stop()

    async def clear_all(self) -> None:
        """Clear every service, dependents first."""
        for service in reversed(self._services):
            await service.clear()


class Core:
    """Container providing config, the optional snapshot database, and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    database: AsyncDatabase[dict[str, Any]] | None
    services: Services

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]] | None = None) -> None:
        """Initialize core with config, MongoDB (when configured), and auto-register services."""
        self.config = config
        self.mongo_client = None
        if database is None and config.database_url:
            self.mongo_client = AsyncMongoClient(config.database_url, tz_aware=True)
            database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
        self.database = database
        # Single writer: every mutating operation holds this lock from its first check to its last write
        self.write_lock = asyncio.Lock()
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start all services on application startup."""
        await self.services.start_all()
        logger.info("core_started", persistence=self.database is not None)

    async def on_stop(self) -> None:
        """Stop services and close MongoDB connection on shutdown."""
        await self.services.stop_all()
        if self.mongo_client is not None:
            await self.mongo_client.aclose()
