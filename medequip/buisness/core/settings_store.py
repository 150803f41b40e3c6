"""
Settings Store
Load/save lifecycle for the process-wide AppSettings document.

Settings always live in the local store, whichever storage mode the record
collections use.
"""

from typing import Optional

from medequip.data.core.app_settings import AppSettings
from medequip.data.storage.base import Document
from medequip.data.storage.local_store import LocalCollectionStore
from medequip.utils.logger import get_logger
from medequip.utils.logging_sanitizer import sanitize_dict

logger = get_logger("medequip.buisness.settings")


class SettingsStore:

    def __init__(self, local_store: LocalCollectionStore):
        self._local = local_store
        self._cached: Optional[AppSettings] = None

    def exists(self) -> bool:
        return self._local.read_document(Document.SETTINGS) is not None

    def load(self) -> AppSettings:
        """Return the stored settings, or defaults when none were saved yet"""
        if self._cached is None:
            record = self._local.read_document(Document.SETTINGS)
            self._cached = AppSettings.from_record(record) if isinstance(record, dict) else AppSettings()
        return self._cached

    def save(self, settings: AppSettings) -> AppSettings:
        self._local.write_document(Document.SETTINGS, settings.to_record())
        self._cached = settings
        logger.info(f"Settings saved: {sanitize_dict(settings.to_record())}")
        return settings

    def add_department(self, name: str) -> bool:
        """
        Append a department to the list if it is new.

        Returns:
            True if the list changed
        """
        name = (name or '').strip()
        if not name:
            return False
        settings = self.load()
        if name in settings.departments:
            return False
        settings.departments.append(name)
        self.save(settings)
        logger.info(f"Department added: {name}")
        return True

    def remove_department(self, name: str) -> bool:
        settings = self.load()
        if name not in settings.departments:
            return False
        settings.departments = [d for d in settings.departments if d != name]
        self.save(settings)
        logger.info(f"Department removed: {name}")
        return True
