"""
Maintenance Manager
Repair requests (CM), preventive maintenance reports (PM) and the upcoming-PM scan.

Two creation modes share one form:
- repair request: type CM, status Pending, the asset goes to Under Repair and
  the request is announced
- PM report: type PM, status Completed, the asset status is left alone

The record and the asset status change are written as one store batch.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from medequip.buisness.assets.asset_manager import AssetManager
from medequip.buisness.core.record_ids import unused_record_id
from medequip.buisness.core.visibility import visible_records
from medequip.buisness.notifications.messages import repair_request_message, upcoming_pm_message
from medequip.buisness.notifications.notifier import Notifier
from medequip.data.core import fields
from medequip.data.core.asset import Asset
from medequip.data.core.maintenance_record import MaintenanceRecord
from medequip.data.core.statuses import AssetStatus, MaintenanceStatus, MaintenanceType
from medequip.data.storage.base import Collection, CollectionStore, StoreOperation
from medequip.errors import RecordNotFoundError, ValidationError
from medequip.utils.logger import get_logger

logger = get_logger("medequip.buisness.maintenance")

MAINTENANCE_ID_PREFIX = 'MT'
DEFAULT_TECHNICIAN = 'Pending Assignment'
PM_ALERT_WINDOW_DAYS = 7


@dataclass(frozen=True)
class UpcomingPm:
    asset: Asset
    days_left: int


class MaintenanceManager:

    def __init__(self, store: CollectionStore, assets: AssetManager, notifier: Notifier):
        self._store = store
        self._assets = assets
        self._notifier = notifier

    def all(self) -> List[MaintenanceRecord]:
        return [MaintenanceRecord.from_record(row) for row in self._store.list(Collection.MAINTENANCE)]

    def list(self, viewer=None) -> List[MaintenanceRecord]:
        return visible_records(viewer, self.all(), self._assets.all())

    def request_repair(self, asset_id: str, description: str, technician: Optional[str] = None,
                       cost=0, request_date: Optional[date] = None, attachment_url: str = '',
                       viewer=None) -> MaintenanceRecord:
        """Open a corrective maintenance request and mark the asset as under repair"""
        asset = self._resolve_asset(asset_id, viewer)
        record = self._build(asset, MaintenanceType.CM, MaintenanceStatus.PENDING, description,
                             technician, cost, request_date, attachment_url)

        self._store.apply([
            StoreOperation.add(Collection.MAINTENANCE, record.to_record()),
            StoreOperation.update(Collection.ASSETS, asset.with_status(AssetStatus.REPAIR).to_record()),
        ])
        logger.info(f"Repair request {record.id} opened for {asset}; asset set to {AssetStatus.REPAIR.value}")

        self._notifier.notify(repair_request_message(record))
        return record

    def record_pm(self, asset_id: str, description: str, technician: Optional[str] = None,
                  cost=0, request_date: Optional[date] = None, attachment_url: str = '',
                  viewer=None) -> MaintenanceRecord:
        """Log a completed preventive maintenance; the asset status does not change"""
        asset = self._resolve_asset(asset_id, viewer)
        record = self._build(asset, MaintenanceType.PM, MaintenanceStatus.COMPLETED, description,
                             technician, cost, request_date, attachment_url)

        self._store.create(Collection.MAINTENANCE, record.to_record())
        logger.info(f"PM report {record.id} recorded for {asset}")
        return record

    def check_upcoming_pms(self, today: Optional[date] = None) -> List[UpcomingPm]:
        """
        Notify about every asset whose next PM falls within the coming week.

        The window is inclusive on both ends: due today (0 days) through
        PM_ALERT_WINDOW_DAYS days ahead. Assets without a readable next PM date
        are skipped. One notification is sent per hit.

        Returns:
            The assets in the window with their remaining days
        """
        today = today or date.today()
        hits = []
        for asset in self._assets.all():
            pm_date = fields.parse_date(asset.next_pm_date)
            if pm_date is None:
                continue
            days_left = (pm_date - today).days
            if 0 <= days_left <= PM_ALERT_WINDOW_DAYS:
                hits.append(UpcomingPm(asset=asset, days_left=days_left))

        for hit in hits:
            self._notifier.notify(upcoming_pm_message(hit.asset, hit.days_left))

        logger.info(f"Upcoming PM scan for {today.isoformat()}: {len(hits)} asset(s) within {PM_ALERT_WINDOW_DAYS} days")
        return hits

    def _resolve_asset(self, asset_id: str, viewer) -> Asset:
        if not asset_id:
            raise ValidationError('กรุณาเลือกครุภัณฑ์')
        try:
            return self._assets.get(asset_id, viewer)
        except RecordNotFoundError as e:
            raise ValidationError('ไม่พบครุภัณฑ์ที่เลือก') from e

    def _build(self, asset: Asset, maintenance_type: MaintenanceType, status: MaintenanceStatus,
               description: str, technician: Optional[str], cost, request_date: Optional[date],
               attachment_url: str) -> MaintenanceRecord:
        description = (description or '').strip()
        if not description:
            raise ValidationError('กรุณาระบุรายละเอียด')

        existing_ids = {row.get('id') for row in self._store.list(Collection.MAINTENANCE)}
        return MaintenanceRecord(
            id=unused_record_id(MAINTENANCE_ID_PREFIX, existing_ids),
            asset_id=asset.id,
            asset_name=asset.name,
            type=maintenance_type,
            request_date=(request_date or date.today()).isoformat(),
            technician=(technician or '').strip() or DEFAULT_TECHNICIAN,
            description=description,
            cost=fields.number(cost),
            status=status,
            attachment_url=attachment_url or '',
        )
