"""
Check Manager
Daily inspection checklists and the per-day summary.

A check passes only when all four checklist items are normal. Every abnormal
item needs a note, otherwise the submission is rejected and nothing is stored.
A failed check is announced on the notification sink.
"""

from datetime import date
from typing import Iterable, List, Optional

from medequip.buisness.assets.asset_manager import AssetManager
from medequip.buisness.core.record_ids import unused_record_id
from medequip.buisness.core.visibility import visible_records
from medequip.buisness.notifications.messages import DailySummary, check_failed_message, daily_summary_message
from medequip.buisness.notifications.notifier import Notifier
from medequip.data.core.check_record import ChecklistDetails, CheckRecord
from medequip.data.core.statuses import CheckStatus
from medequip.data.storage.base import Collection, CollectionStore
from medequip.errors import RecordNotFoundError, ValidationError
from medequip.utils.logger import get_logger

logger = get_logger("medequip.buisness.checks")

CHECK_ID_PREFIX = 'CHK'


def evaluate(details: ChecklistDetails) -> CheckStatus:
    """Pass if and only if every checklist item is normal"""
    return CheckStatus.PASS if details.all_passed() else CheckStatus.FAIL


class CheckManager:

    def __init__(self, store: CollectionStore, assets: AssetManager, notifier: Notifier,
                 summary_departments: Iterable[str] = ('เวชกรรมฟื้นฟู',)):
        self._store = store
        self._assets = assets
        self._notifier = notifier
        self._summary_departments = {d for d in summary_departments if d}

    def all(self) -> List[CheckRecord]:
        return [CheckRecord.from_record(row) for row in self._store.list(Collection.CHECKS)]

    def list(self, viewer=None) -> List[CheckRecord]:
        return visible_records(viewer, self.all(), self._assets.all())

    def submit(self, asset_id: str, checker_name: str, details: ChecklistDetails,
               notes: Optional[str] = None, check_date: Optional[date] = None,
               viewer=None) -> CheckRecord:
        """
        Record a daily check.

        Args:
            asset_id: Asset being inspected (must be visible to the viewer)
            checker_name: Name of the inspector
            details: Outcome of the four checklist items with their notes
            notes: Extra remarks, kept only when the check fails
            check_date: Inspection date, today by default
            viewer: Submitting user

        Raises:
            ValidationError: Missing asset or checker, or an abnormal item without a note
        """
        if not asset_id:
            raise ValidationError('กรุณาเลือกครุภัณฑ์')
        checker_name = (checker_name or '').strip()
        if not checker_name:
            raise ValidationError('กรุณาระบุชื่อผู้ตรวจ')

        for _, label, note in details.failed_items():
            if not (note or '').strip():
                raise ValidationError(f'กรุณาระบุหมายเหตุสำหรับรายการที่ผิดปกติ: {label}')

        try:
            asset = self._assets.get(asset_id, viewer)
        except RecordNotFoundError as e:
            raise ValidationError('ไม่พบครุภัณฑ์ที่เลือก') from e

        status = evaluate(details)
        extra_notes = (notes or '').strip() or None
        existing_ids = {row.get('id') for row in self._store.list(Collection.CHECKS)}
        check = CheckRecord(
            id=unused_record_id(CHECK_ID_PREFIX, existing_ids),
            asset_id=asset.id,
            asset_name=asset.name,
            date=(check_date or date.today()).isoformat(),
            checker_name=checker_name,
            status=status,
            notes=extra_notes if status == CheckStatus.FAIL else None,
            checklist_details=details,
        )
        self._store.create(Collection.CHECKS, check.to_record())
        logger.info(f"Daily check {check.id} for {asset} by {checker_name}: {status.value}")

        if status == CheckStatus.FAIL:
            self._notifier.notify(check_failed_message(check))
        return check

    def can_send_summary(self, viewer) -> bool:
        if viewer is None:
            return False
        if getattr(viewer, 'is_admin', False):
            return True
        return getattr(viewer, 'department', None) in self._summary_departments

    def daily_summary(self, viewer, summary_date: Optional[date] = None,
                      checker_name: Optional[str] = None) -> DailySummary:
        day = (summary_date or date.today()).isoformat()
        todays = [check for check in self.list(viewer) if check.date == day]
        failed = [check for check in todays if not check.passed]
        return DailySummary(
            department=getattr(viewer, 'department', None) or 'ทุกแผนก',
            checker=(checker_name or '').strip() or getattr(viewer, 'username', '') or '-',
            date=day,
            total=len(todays),
            fail_count=len(failed),
            failed_items=[check.asset_name for check in failed],
        )

    def send_daily_summary(self, viewer, summary_date: Optional[date] = None,
                           checker_name: Optional[str] = None) -> DailySummary:
        """
        Build today's summary for the viewer and push it to the notification sink.

        Raises:
            ValidationError: If the viewer may not send summaries or nothing was checked that day
        """
        if not self.can_send_summary(viewer):
            raise ValidationError('เฉพาะแผนกเวชกรรมฟื้นฟูหรือผู้ดูแลระบบเท่านั้นที่ส่งสรุปได้')

        summary = self.daily_summary(viewer, summary_date, checker_name)
        if summary.total == 0:
            raise ValidationError('ยังไม่มีการตรวจเช็คในวันนี้')

        self._notifier.notify(daily_summary_message(summary))
        logger.info(f"Daily summary sent for {summary.department} {summary.date}: "
                    f"{summary.total} checked, {summary.fail_count} failed")
        return summary
