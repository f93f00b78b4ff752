from typing import Any, Self

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

logger = structlog.get_logger(__name__)


class MongoModel(BaseModel):
    id: int = Field(alias="_id", serialization_alias="id")

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage with _id field."""
        data = self.model_dump()
        if "id" in data:
            data["_id"] = data.pop("id")  # Rename id → _id for MongoDB
        return data

    @classmethod
    def from_mongo_list(cls, docs: list[dict[str, Any]]) -> list[Self]:
        """Validate a list of raw MongoDB documents into model instances."""
        return [cls.model_validate(doc) for doc in docs]


class SnapshotCollection:
    """Best-effort durable mirror of one in-memory collection.

    The in-memory store is authoritative. Writes here happen after the memory
    mutation and failures are logged, never raised. Without a database every
    method is a no-op.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None, name: str) -> None:
        self.name = name
        self._collection = database.get_collection(name) if database is not None else None

    async def load(self) -> list[dict[str, Any]]:
        """Read every stored document; returns an empty list when the snapshot is unreadable."""
        if self._collection is None:
            return []
        try:
            return [doc async for doc in self._collection.find()]
        except PyMongoError as e:
            logger.warning("snapshot_load_failed", collection=self.name, error=str(e))
            return []

    async def save(self, model: MongoModel) -> None:
        """Upsert a document by its _id."""
        if self._collection is None:
            return
        doc = model.to_mongo()
        try:
            await self._collection.replace_one({"_id": doc["_id"]}, doc, upsert=True)
        except PyMongoError as e:
            logger.warning("snapshot_write_failed", collection=self.name, key=doc["_id"], error=str(e))

    async def delete(self, key: Any) -> None:  # noqa: ANN401
        if self._collection is None:
            return
        try:
            await self._collection.delete_one({"_id": key})
        except PyMongoError as e:
            logger.warning("snapshot_delete_failed", collection=self.name, key=key, error=str(e))

    async def clear(self) -> None:
        if self._collection is None:
            return
        try:
            await self._collection.delete_many({})
        except PyMongoError as e:
            logger.warning("snapshot_clear_failed", collection=self.name, error=str(e))
