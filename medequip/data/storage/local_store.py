"""
Local Collection Store
Keeps each collection as one JSON blob in the local database.

Writes are read-modify-write of the whole blob. They are serialized through a
process-wide lock and every batch commits in a single transaction, so a
cross-collection change (e.g. a loan plus its asset status) lands together.
"""

import copy
import json
import threading
from typing import Any, Dict, List, Optional, Sequence

from medequip import db
from medequip.data.storage.base import Action, Collection, CollectionStore, Document, StoreOperation
from medequip.data.storage.sample_data import SAMPLE_RECORDS
from medequip.data.storage.stored_collection import StoredCollection
from medequip.errors import DuplicateRecordError, RecordNotFoundError, StorageUnavailableError
from medequip.utils.logger import get_logger

logger = get_logger("medequip.storage.local")

_write_lock = threading.RLock()


class LocalCollectionStore(CollectionStore):
    """
    Record storage in the local database.

    Collections with no stored blob yet are served from the built-in sample
    records (when seed_samples is on) until they are first written.
    """

    mode = 'local'

    def __init__(self, seed_samples: bool = True):
        self.seed_samples = seed_samples

    def list(self, collection: Collection) -> List[Dict[str, Any]]:
        blob = self._load(collection.value)
        if blob is None:
            if not self.seed_samples:
                return []
            logger.debug(f"No stored blob for {collection.value}, serving sample records")
            return copy.deepcopy(SAMPLE_RECORDS.get(collection, []))
        return blob

    def apply(self, operations: Sequence[StoreOperation]) -> None:
        if not operations:
            return

        with _write_lock:
            try:
                working: Dict[Collection, List[Dict[str, Any]]] = {}
                for operation in operations:
                    records = working.get(operation.collection)
                    if records is None:
                        records = working[operation.collection] = self.list(operation.collection)
                    self._apply_operation(records, operation)

                for collection, records in working.items():
                    self._stage(collection.value, records)
                db.session.commit()
            except Exception:
                db.session.rollback()
                raise

        logger.debug(f"Applied {len(operations)} local operation(s): "
                     f"{', '.join(op.describe() for op in operations)}")

    @staticmethod
    def _apply_operation(records: List[Dict[str, Any]], operation: StoreOperation) -> None:
        collection = operation.collection.value
        record_id = operation.record.get('id')

        if operation.action == Action.ADD:
            if any(r.get('id') == record_id for r in records):
                raise DuplicateRecordError(collection, record_id)
            # Newest first
            records.insert(0, dict(operation.record))

        elif operation.action == Action.UPDATE:
            for index, existing in enumerate(records):
                if existing.get('id') == record_id:
                    records[index] = dict(operation.record)
                    break
            else:
                raise RecordNotFoundError(collection, record_id)

        elif operation.action == Action.DELETE:
            remaining = [r for r in records if r.get('id') != record_id]
            if len(remaining) == len(records):
                logger.debug(f"Delete of unknown {collection} record '{record_id}' ignored")
            records[:] = remaining

    def replace_collections(self, collections: Dict[Collection, List[Dict[str, Any]]]) -> None:
        """Overwrite whole collections in one transaction (used by backup restore)"""
        with _write_lock:
            try:
                for collection, records in collections.items():
                    self._stage(collection.value, list(records))
                db.session.commit()
            except Exception:
                db.session.rollback()
                raise
        logger.info(f"Replaced local collections: {', '.join(c.value for c in collections)}")

    def read_document(self, document: Document, default: Any = None) -> Any:
        blob = self._load(document.value)
        return default if blob is None else blob

    def write_document(self, document: Document, value: Any) -> None:
        with _write_lock:
            try:
                self._stage(document.value, value)
                db.session.commit()
            except Exception:
                db.session.rollback()
                raise

    def delete_document(self, document: Document) -> None:
        with _write_lock:
            row = db.session.get(StoredCollection, document.value)
            if row is not None:
                db.session.delete(row)
                db.session.commit()

    @staticmethod
    def _load(key: str) -> Optional[Any]:
        row = db.session.get(StoredCollection, key)
        if row is None:
            return None
        try:
            return json.loads(row.payload)
        except json.JSONDecodeError as e:
            logger.error(f"Stored blob '{key}' is not valid JSON: {e}")
            raise StorageUnavailableError(f"Local data for {key} is unreadable") from e

    @staticmethod
    def _stage(key: str, value: Any) -> None:
        row = db.session.get(StoredCollection, key)
        if row is None:
            row = StoredCollection(key=key)
            db.session.add(row)
        row.payload = json.dumps(value, ensure_ascii=False)
