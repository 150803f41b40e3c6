"""
Persistence adapters for the record collections
"""

from medequip.data.storage.base import Action, Collection, CollectionStore, Document, StoreOperation
from medequip.data.storage.local_store import LocalCollectionStore
from medequip.data.storage.remote_store import RemoteSheetStore
from medequip.utils.logger import get_logger

logger = get_logger("medequip.storage")


def select_store(settings, local_store: LocalCollectionStore, timeout: float = 15.0) -> CollectionStore:
    """
    Pick the record store for the current settings.

    A well-formed https endpoint in the settings routes every record
    operation to the remote sheet; otherwise the local store is used.
    """
    if settings.uses_remote_storage:
        logger.debug(f"Using remote storage at {settings.remote_endpoint_url}")
        return RemoteSheetStore(settings.remote_endpoint_url, timeout=timeout)
    return local_store
