"""
Daily check record and its four-item checklist.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from medequip.data.core import fields
from medequip.data.core.statuses import CheckStatus


# (item key, Thai label used in notifications and validation messages)
CHECKLIST_ITEMS: Tuple[Tuple[str, str], ...] = (
    ('power_cord', 'สายไฟ/ปลั๊กไฟ'),
    ('screen', 'หน้าจอ/ไฟสถานะ'),
    ('functionality', 'การทำงานทั่วไป'),
    ('cleanliness', 'ความสะอาด'),
)

_WIRE_KEYS = {
    'power_cord': 'powerCord',
    'screen': 'screen',
    'functionality': 'functionality',
    'cleanliness': 'cleanliness',
}


@dataclass
class ChecklistDetails:
    """Outcome of each checklist item; a note explains an abnormal item"""

    power_cord: bool = True
    power_cord_note: str = ''
    screen: bool = True
    screen_note: str = ''
    functionality: bool = True
    functionality_note: str = ''
    cleanliness: bool = True
    cleanliness_note: str = ''

    def all_passed(self) -> bool:
        return all(getattr(self, key) for key, _ in CHECKLIST_ITEMS)

    def failed_items(self) -> List[Tuple[str, str, str]]:
        """Return (key, label, note) for every abnormal item, in checklist order"""
        return [
            (key, label, getattr(self, f'{key}_note'))
            for key, label in CHECKLIST_ITEMS
            if not getattr(self, key)
        ]

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ChecklistDetails":
        values = {}
        for key, wire in _WIRE_KEYS.items():
            values[key] = fields.flag(record.get(wire), default=True)
            values[f'{key}_note'] = fields.text(record.get(f'{wire}Note'))
        return cls(**values)

    def to_record(self) -> Dict[str, Any]:
        record = {}
        for key, wire in _WIRE_KEYS.items():
            record[wire] = getattr(self, key)
            record[f'{wire}Note'] = getattr(self, f'{key}_note')
        return record


@dataclass
class CheckRecord:
    id: str
    asset_id: str
    asset_name: str
    date: str
    checker_name: str
    status: CheckStatus
    type: str = 'Daily'
    notes: Optional[str] = None
    checklist_details: Optional[ChecklistDetails] = None

    @property
    def passed(self) -> bool:
        return self.status == CheckStatus.PASS

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CheckRecord":
        details = record.get('checklistDetails')
        return cls(
            id=fields.text(record.get('id')),
            asset_id=fields.text(record.get('assetId')),
            asset_name=fields.text(record.get('assetName')),
            date=fields.date_text(record.get('date')),
            checker_name=fields.text(record.get('checkerName')),
            status=CheckStatus.coerce(record.get('status'), default=CheckStatus.PASS),
            type=fields.text(record.get('type')) or 'Daily',
            notes=fields.optional_text(record.get('notes')),
            checklist_details=ChecklistDetails.from_record(details) if isinstance(details, dict) else None,
        )

    def to_record(self) -> Dict[str, Any]:
        record = {
            'id': self.id,
            'assetId': self.asset_id,
            'assetName': self.asset_name,
            'date': self.date,
            'checkerName': self.checker_name,
            'type': self.type,
            'status': self.status.value,
        }
        if self.notes:
            record['notes'] = self.notes
        if self.checklist_details is not None:
            record['checklistDetails'] = self.checklist_details.to_record()
        return record
