"""
Loan record: equipment lent to another ward and its return.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from medequip.data.core import fields
from medequip.data.core.statuses import LoanStatus


@dataclass
class LoanRecord:
    id: str
    asset_id: str
    asset_name: str
    borrower_name: str
    department: str
    loan_date: str
    due_date: str
    status: LoanStatus = LoanStatus.ACTIVE
    return_date: Optional[str] = None

    @property
    def is_open(self) -> bool:
        """Active or overdue loans still wait for the asset to come back"""
        return self.status in (LoanStatus.ACTIVE, LoanStatus.OVERDUE)

    def is_overdue(self, today: date) -> bool:
        if self.status == LoanStatus.OVERDUE:
            return True
        if self.status != LoanStatus.ACTIVE:
            return False
        due = fields.parse_date(self.due_date)
        return due is not None and due < today

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "LoanRecord":
        return cls(
            id=fields.text(record.get('id')),
            asset_id=fields.text(record.get('assetId')),
            asset_name=fields.text(record.get('assetName')),
            borrower_name=fields.text(record.get('borrowerName')),
            department=fields.text(record.get('department')),
            loan_date=fields.date_text(record.get('loanDate')),
            due_date=fields.date_text(record.get('dueDate')),
            status=LoanStatus.coerce(record.get('status'), default=LoanStatus.ACTIVE),
            return_date=fields.date_text(record.get('returnDate')) or None,
        )

    def to_record(self) -> Dict[str, Any]:
        record = {
            'id': self.id,
            'assetId': self.asset_id,
            'assetName': self.asset_name,
            'borrowerName': self.borrower_name,
            'department': self.department,
            'loanDate': self.loan_date,
            'dueDate': self.due_date,
            'status': self.status.value,
        }
        if self.return_date:
            record['returnDate'] = self.return_date
        return record
