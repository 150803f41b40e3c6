"""
Collection Store
Uniform list/create/update/delete over named record collections.

Two implementations exist:
- LocalCollectionStore: JSON blobs in the local database, one row per collection
- RemoteSheetStore: a spreadsheet-backed HTTP endpoint
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Sequence


class Collection(str, Enum):
    """Record collections addressed by the stores"""
    ASSETS = 'Assets'
    CHECKS = 'Checks'
    MAINTENANCE = 'Maintenance'
    LOANS = 'Loans'

    def __str__(self):
        return self.value


class Document(str, Enum):
    """Single documents that always live in the local store"""
    USERS = 'Users'
    SETTINGS = 'Settings'
    AUDIT_PROGRESS = 'AuditProgress'

    def __str__(self):
        return self.value


class Action(str, Enum):
    ADD = 'add'
    UPDATE = 'update'
    DELETE = 'delete'


@dataclass(frozen=True)
class StoreOperation:
    """One write inside a batch passed to CollectionStore.apply()"""
    collection: Collection
    action: Action
    record: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def add(cls, collection: Collection, record: Dict[str, Any]) -> "StoreOperation":
        return cls(collection, Action.ADD, record)

    @classmethod
    def update(cls, collection: Collection, record: Dict[str, Any]) -> "StoreOperation":
        return cls(collection, Action.UPDATE, record)

    @classmethod
    def delete(cls, collection: Collection, record_id: str) -> "StoreOperation":
        return cls(collection, Action.DELETE, {'id': record_id})

    def describe(self) -> str:
        return f"{self.action.value} {self.collection.value}/{self.record.get('id')}"


class CollectionStore(ABC):
    """Abstract record storage addressed by collection name"""

    mode = 'abstract'

    @abstractmethod
    def list(self, collection: Collection) -> List[Dict[str, Any]]:
        """Return every record of the collection"""

    @abstractmethod
    def apply(self, operations: Sequence[StoreOperation]) -> None:
        """Perform a batch of writes"""

    def create(self, collection: Collection, record: Dict[str, Any]) -> Dict[str, Any]:
        self.apply([StoreOperation.add(collection, record)])
        return record

    def update(self, collection: Collection, record: Dict[str, Any]) -> Dict[str, Any]:
        self.apply([StoreOperation.update(collection, record)])
        return record

    def delete(self, collection: Collection, record_id: str) -> None:
        self.apply([StoreOperation.delete(collection, record_id)])

    @property
    def is_remote(self) -> bool:
        return self.mode == 'remote'
