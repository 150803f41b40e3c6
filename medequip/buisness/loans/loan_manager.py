"""
Loan Manager
Lending equipment to other wards and taking it back.
"""

from datetime import date
from typing import List, Optional

from medequip.buisness.assets.asset_manager import AssetManager
from medequip.buisness.core.record_ids import unused_record_id
from medequip.buisness.core.visibility import visible_records
from medequip.data.core.loan_record import LoanRecord
from medequip.data.core.statuses import AssetStatus, LoanStatus
from medequip.data.storage.base import Collection, CollectionStore, StoreOperation
from medequip.errors import RecordNotFoundError, ValidationError
from medequip.utils.logger import get_logger

logger = get_logger("medequip.buisness.loans")

LOAN_ID_PREFIX = 'LN'
UNSPECIFIED_DEPARTMENT = 'ไม่ระบุ'


class LoanManager:
    """
    Loan lifecycle: Active (or Overdue) until returned.

    Borrowing marks the asset Loaned and returning puts it back to Active, each
    in the same store batch as the loan record. A return leaves the asset alone
    when something else changed its status while it was out.
    """

    def __init__(self, store: CollectionStore, assets: AssetManager):
        self._store = store
        self._assets = assets

    def all(self) -> List[LoanRecord]:
        return [LoanRecord.from_record(row) for row in self._store.list(Collection.LOANS)]

    def list(self, viewer=None) -> List[LoanRecord]:
        return visible_records(viewer, self.all(), self._assets.all())

    def open_loans(self, viewer=None) -> List[LoanRecord]:
        return [loan for loan in self.list(viewer) if loan.is_open]

    def get(self, loan_id: str, viewer=None) -> LoanRecord:
        """
        Fetch one loan visible to the viewer.

        Raises:
            RecordNotFoundError: If no such loan is visible
        """
        for loan in self.list(viewer):
            if loan.id == loan_id:
                return loan
        raise RecordNotFoundError(Collection.LOANS.value, loan_id)

    def create_loan(self, asset_id: str, borrower_name: str, department: Optional[str] = None,
                    due_date: Optional[str] = None, loan_date: Optional[date] = None,
                    viewer=None) -> LoanRecord:
        """
        Lend an asset.

        Raises:
            ValidationError: Borrower missing, or the asset is not Active
        """
        borrower_name = (borrower_name or '').strip()
        if not asset_id or not borrower_name:
            raise ValidationError('กรุณาระบุครุภัณฑ์และชื่อผู้ยืม')

        try:
            asset = self._assets.get(asset_id, viewer)
        except RecordNotFoundError as e:
            raise ValidationError('ไม่พบครุภัณฑ์ที่เลือก') from e

        if asset.status != AssetStatus.ACTIVE:
            raise ValidationError(f'ครุภัณฑ์ {asset.name} ไม่พร้อมให้ยืม (สถานะ: {asset.status.value})')

        existing_ids = {row.get('id') for row in self._store.list(Collection.LOANS)}
        loan = LoanRecord(
            id=unused_record_id(LOAN_ID_PREFIX, existing_ids),
            asset_id=asset.id,
            asset_name=asset.name,
            borrower_name=borrower_name,
            department=(department or '').strip() or UNSPECIFIED_DEPARTMENT,
            loan_date=(loan_date or date.today()).isoformat(),
            due_date=(due_date or '').strip(),
            status=LoanStatus.ACTIVE,
        )

        self._store.apply([
            StoreOperation.add(Collection.LOANS, loan.to_record()),
            StoreOperation.update(Collection.ASSETS, asset.with_status(AssetStatus.LOANED).to_record()),
        ])
        logger.info(f"Loan {loan.id}: {asset} lent to {borrower_name} ({loan.department}) until {loan.due_date or '-'}")
        return loan

    def return_loan(self, loan_id: str, return_date: Optional[date] = None, viewer=None) -> LoanRecord:
        """
        Close a loan and make the asset available again.

        Raises:
            RecordNotFoundError: Unknown loan id, or a loan of an asset the viewer cannot see
            ValidationError: Loan already returned
        """
        loan = self.get(loan_id, viewer)
        if not loan.is_open:
            raise ValidationError('รายการนี้ได้รับคืนแล้ว')

        loan.status = LoanStatus.RETURNED
        loan.return_date = (return_date or date.today()).isoformat()
        operations = [StoreOperation.update(Collection.LOANS, loan.to_record())]

        asset = next((a for a in self._assets.all() if a.id == loan.asset_id), None)
        if asset is None:
            logger.warning(f"Loan {loan.id} returned but asset {loan.asset_id} no longer exists")
        elif asset.status != AssetStatus.LOANED:
            logger.warning(f"Loan {loan.id} returned; {asset} is {asset.status.value}, status left unchanged")
        else:
            operations.append(StoreOperation.update(Collection.ASSETS, asset.with_status(AssetStatus.ACTIVE).to_record()))

        self._store.apply(operations)
        logger.info(f"Loan {loan.id} returned on {loan.return_date}")
        return loan
