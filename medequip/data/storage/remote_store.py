"""
Remote Sheet Store
Proxies collection operations to a spreadsheet-backed HTTP endpoint.

Protocol:
- GET  <endpoint>?sheet=<Collection>&t=<epoch-ms>  -> JSON array of flat rows
- POST <endpoint> {"sheet": ..., "action": "add"|"update"|"delete", "data": ...}

The POST response body is never read; the endpoint only acknowledges delivery.
Batches are posted one request at a time and are NOT atomic: a failure part way
leaves the earlier operations applied on the remote side.
"""

import time
from typing import Any, Dict, List, Optional, Sequence

import requests

from medequip.data.storage.base import Collection, CollectionStore, StoreOperation
from medequip.errors import StorageUnavailableError, StorageWriteError
from medequip.utils.logger import get_logger

logger = get_logger("medequip.storage.remote")


class RemoteSheetStore(CollectionStore):

    mode = 'remote'

    def __init__(self, endpoint_url: str, timeout: float = 15.0,
                 session: Optional[requests.Session] = None):
        self.endpoint_url = endpoint_url.strip()
        self.timeout = timeout
        self.session = session or requests.Session()

    def list(self, collection: Collection) -> List[Dict[str, Any]]:
        params = {'sheet': collection.value, 't': int(time.time() * 1000)}
        try:
            response = self.session.get(self.endpoint_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"Remote fetch of {collection.value} failed: {e}")
            raise StorageUnavailableError(f"Could not load {collection.value} from remote storage") from e
        except ValueError as e:
            logger.error(f"Remote fetch of {collection.value} returned invalid JSON: {e}")
            raise StorageUnavailableError(f"Remote storage sent an unreadable {collection.value} list") from e

        if not isinstance(payload, list):
            logger.error(f"Remote fetch of {collection.value} returned {type(payload).__name__}, expected a list")
            raise StorageUnavailableError(f"Remote storage sent an unreadable {collection.value} list")

        return [row for row in payload if isinstance(row, dict)]

    def apply(self, operations: Sequence[StoreOperation]) -> None:
        delivered = []
        for operation in operations:
            try:
                self._post(operation)
            except StorageWriteError:
                if delivered:
                    logger.error(f"Remote batch stopped after {len(delivered)} operation(s) "
                                 f"[{', '.join(delivered)}]; '{operation.describe()}' and later were not sent")
                raise
            delivered.append(operation.describe())

    def _post(self, operation: StoreOperation) -> None:
        body = {
            'sheet': operation.collection.value,
            'action': operation.action.value,
            'data': operation.record,
        }
        try:
            self.session.post(self.endpoint_url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Remote post '{operation.describe()}' failed: {e}")
            raise StorageWriteError(f"Could not send {operation.action.value} to remote storage") from e
        logger.debug(f"Remote post '{operation.describe()}' sent")
