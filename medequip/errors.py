"""
Exception hierarchy shared by the storage, business and presentation layers.

Validation failures subclass ValueError so routes can keep catching ValueError
for user-facing messages.
"""


class DomainError(Exception):
    """Base class for application errors"""


class ValidationError(DomainError, ValueError):
    """Input rejected before anything was persisted"""


class DuplicateRecordError(ValidationError):
    """A record with the same id already exists in the collection"""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} record '{record_id}' already exists")


class RecordNotFoundError(DomainError, LookupError):
    """No record with the requested id"""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} record '{record_id}' not found")


class StorageError(DomainError):
    """Transport failure talking to the record storage"""


class StorageUnavailableError(StorageError):
    """A read could not be served; distinct from an empty collection"""


class StorageWriteError(StorageError):
    """A write could not be delivered to the storage"""
