"""
Audit Tracker
Physical count (found / missing) of assets, kept apart from the asset records.
"""

from dataclasses import dataclass
from typing import Dict, Iterable

from medequip.data.core.asset import Asset
from medequip.data.core.statuses import AuditStatus
from medequip.data.storage.base import Document
from medequip.data.storage.local_store import LocalCollectionStore
from medequip.utils.logger import get_logger

logger = get_logger("medequip.buisness.audit")

AUDIT_LABELS = {
    AuditStatus.FOUND: 'Found',
    AuditStatus.MISSING: 'Missing',
    AuditStatus.UNCHECKED: 'Not Checked',
}


@dataclass(frozen=True)
class AuditSummary:
    total: int
    found: int
    missing: int

    @property
    def checked(self) -> int:
        return self.found + self.missing

    @property
    def progress(self) -> int:
        """Percent of assets counted, rounded"""
        if self.total == 0:
            return 0
        return round(self.checked / self.total * 100)


class AuditTracker:

    def __init__(self, local_store: LocalCollectionStore):
        self._local = local_store

    def load(self) -> Dict[str, AuditStatus]:
        raw = self._local.read_document(Document.AUDIT_PROGRESS, default={})
        if not isinstance(raw, dict):
            return {}
        return {asset_id: AuditStatus.coerce(value, default=AuditStatus.UNCHECKED) for asset_id, value in raw.items()}

    def status_of(self, asset_id: str) -> AuditStatus:
        return self.load().get(asset_id, AuditStatus.UNCHECKED)

    def toggle(self, asset_id: str, status: AuditStatus) -> AuditStatus:
        """
        Mark an asset found or missing.

        Choosing the status the asset already has clears it back to unchecked.

        Returns:
            The status now recorded for the asset
        """
        progress = self.load()
        current = progress.get(asset_id, AuditStatus.UNCHECKED)
        new_status = AuditStatus.UNCHECKED if current == status else status
        progress[asset_id] = new_status
        self._save(progress)
        logger.debug(f"Audit status of {asset_id}: {current.value} -> {new_status.value}")
        return new_status

    def reset(self) -> None:
        self._local.delete_document(Document.AUDIT_PROGRESS)
        logger.info("Audit progress reset")

    def summarize(self, assets: Iterable[Asset]) -> AuditSummary:
        progress = self.load()
        statuses = [progress.get(asset.id, AuditStatus.UNCHECKED) for asset in assets]
        return AuditSummary(
            total=len(statuses),
            found=statuses.count(AuditStatus.FOUND),
            missing=statuses.count(AuditStatus.MISSING),
        )

    def _save(self, progress: Dict[str, AuditStatus]) -> None:
        self._local.write_document(
            Document.AUDIT_PROGRESS,
            {asset_id: status.value for asset_id, status in progress.items()},
        )
