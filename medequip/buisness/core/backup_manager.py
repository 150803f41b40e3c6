"""
Backup Manager
Full export of the record collections and restore into the local store.

Backup document:
    {"assets": [...], "checks": [...], "maintenance": [...], "loans": [...],
     "timestamp": "<ISO-8601>"}
"""

import json
from datetime import datetime
from typing import Dict, List

from medequip.data.storage.base import Collection, CollectionStore
from medequip.data.storage.local_store import LocalCollectionStore
from medequip.errors import ValidationError
from medequip.utils.logger import get_logger

logger = get_logger("medequip.buisness.backup")

BACKUP_KEYS = {
    'assets': Collection.ASSETS,
    'checks': Collection.CHECKS,
    'maintenance': Collection.MAINTENANCE,
    'loans': Collection.LOANS,
}


class BackupManager:

    def __init__(self, store: CollectionStore, local_store: LocalCollectionStore):
        self._store = store
        self._local = local_store

    def export_all(self) -> str:
        """Serialize every collection of the active store as a pretty-printed JSON document"""
        document = {key: self._store.list(collection) for key, collection in BACKUP_KEYS.items()}
        document['timestamp'] = datetime.now().isoformat()
        logger.info(f"Backup exported ({', '.join(f'{k}={len(document[k])}' for k in BACKUP_KEYS)})")
        return json.dumps(document, ensure_ascii=False, indent=2)

    def import_data(self, text: str) -> Dict[str, int]:
        """
        Replace the local collections found in a backup document.

        Collections missing from the document are left untouched.

        Returns:
            Number of records restored per backup key

        Raises:
            ValidationError: In remote storage mode, or when the document is not a backup
        """
        if self._store.is_remote:
            raise ValidationError('การนำเข้าข้อมูลใช้ได้เฉพาะโหมด Local Storage เท่านั้น')

        try:
            document = json.loads(text)
        except (TypeError, ValueError) as e:
            logger.warning(f"Backup import rejected, invalid JSON: {e}")
            raise ValidationError('ไฟล์ไม่ถูกต้อง (Invalid JSON)') from e

        if not isinstance(document, dict):
            raise ValidationError('ไฟล์ไม่ถูกต้อง (Invalid JSON)')

        replacements: Dict[Collection, List[dict]] = {}
        for key, collection in BACKUP_KEYS.items():
            rows = document.get(key)
            if rows is None:
                continue
            if not isinstance(rows, list):
                raise ValidationError(f'ข้อมูล {key} ในไฟล์สำรองไม่ถูกต้อง')
            replacements[collection] = [row for row in rows if isinstance(row, dict)]

        if not replacements:
            raise ValidationError('ไม่พบข้อมูลในไฟล์สำรอง')

        self._local.replace_collections(replacements)
        restored = {key: len(replacements[c]) for key, c in BACKUP_KEYS.items() if c in replacements}
        logger.info(f"Backup restored from {document.get('timestamp', 'unknown time')}: {restored}")
        return restored
