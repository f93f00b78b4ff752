from typing import Any

from pymongo.asynchronous.database import AsyncDatabase

from missioncontrol.core.core import Service
from missioncontrol.core.db import SnapshotCollection
from missioncontrol.core.modules.counter.models import Counter, CounterType


class CounterService(Service):
    """Issues ids that are never reused until the counters are cleared."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]] | None) -> None:
        super().__init__(database)
        self._snapshot = SnapshotCollection(database, "counters")
        self._counters: dict[CounterType, Counter] = {}

    async def on_start(self) -> None:
        counters = Counter.from_mongo_list(await self._snapshot.load())
        self._counters = {counter.id: counter for counter in counters}

    async def get_next_sequence(self, counter_type: CounterType) -> int:
        """Increment and return the next id for a counter type, starting at 1."""
        counter = self._counters.setdefault(counter_type, Counter(id=counter_type))
        counter.seq += 1
        await self._snapshot.save(counter)
        return counter.seq

    async def clear(self) -> None:
        self._counters = {}
        await self._snapshot.clear()
