"""
Inventra Backend — Entity Repository
======================================

What:  Persistence port for entity records plus an in-memory implementation.
How:   EntityRepository is the contract the services call; InMemoryRepository
       keeps records in per-entity dicts with an auto-incrementing id.
Who:   Called by EntityService; the app factory installs the implementation on
       app.state.repository.

Scope:
    The SQL data-access layer of a production deployment plugs in behind this
    interface. InMemoryRepository is what the app runs with when none is
    supplied, and what the tests use.

Concurrency:
    InMemoryRepository is mutated only from the event loop and never awaits in
    the middle of a mutation, so no locking is needed within one process.
"""

import itertools
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any, Dict, Iterator, List, Optional


Record = Dict[str, Any]


class EntityRepository(ABC):
    """
    Storage contract for entity records.

    Records are plain dicts; `id` is assigned by the repository on create and
    is never taken from the client payload.
    """

    @abstractmethod
    async def list(self, entity_key: str) -> List[Record]:
        """All records of an entity, ordered by id."""
        ...

    @abstractmethod
    async def get(self, entity_key: str, record_id: int) -> Optional[Record]:
        """One record, or None when it does not exist."""
        ...

    @abstractmethod
    async def create(self, entity_key: str, data: Record) -> Record:
        """Stores a new record and returns it with its id."""
        ...

    @abstractmethod
    async def update(self, entity_key: str, record_id: int, data: Record) -> Optional[Record]:
        """Replaces a record's fields; None when it does not exist."""
        ...

    @abstractmethod
    async def delete(self, entity_key: str, record_id: int) -> bool:
        """Removes a record; False when it did not exist."""
        ...


class InMemoryRepository(EntityRepository):
    """Process-local repository backed by dicts."""

    def __init__(self) -> None:
        self._records: Dict[str, Dict[int, Record]] = defaultdict(dict)
        self._sequences: Dict[str, Iterator[int]] = defaultdict(lambda: itertools.count(1))

    async def list(self, entity_key: str) -> List[Record]:
        records = self._records[entity_key]
        return [dict(records[record_id]) for record_id in sorted(records)]

    async def get(self, entity_key: str, record_id: int) -> Optional[Record]:
        record = self._records[entity_key].get(record_id)
        return dict(record) if record is not None else None

    async def create(self, entity_key: str, data: Record) -> Record:
        record_id = next(self._sequences[entity_key])
        record = {"id": record_id, **_without_id(data)}
        self._records[entity_key][record_id] = record
        return dict(record)

    async def update(self, entity_key: str, record_id: int, data: Record) -> Optional[Record]:
        if record_id not in self._records[entity_key]:
            return None
        record = {"id": record_id, **_without_id(data)}
        self._records[entity_key][record_id] = record
        return dict(record)

    async def delete(self, entity_key: str, record_id: int) -> bool:
        return self._records[entity_key].pop(record_id, None) is not None


def _without_id(data: Record) -> Record:
    return {key: value for key, value in data.items() if key != "id"}
