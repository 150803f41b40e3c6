"""
Maintenance record: a corrective repair request (CM) or a preventive maintenance report (PM).
"""

from dataclasses import dataclass
from typing import Any, Dict

from medequip.data.core import fields
from medequip.data.core.statuses import MaintenanceStatus, MaintenanceType


@dataclass
class MaintenanceRecord:
    id: str
    asset_id: str
    asset_name: str
    type: MaintenanceType
    request_date: str
    technician: str
    description: str
    cost: float = 0.0
    status: MaintenanceStatus = MaintenanceStatus.PENDING
    attachment_url: str = ''

    @property
    def has_attachment(self) -> bool:
        return bool(self.attachment_url)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "MaintenanceRecord":
        return cls(
            id=fields.text(record.get('id')),
            asset_id=fields.text(record.get('assetId')),
            asset_name=fields.text(record.get('assetName')),
            type=MaintenanceType.coerce(record.get('type'), default=MaintenanceType.CM),
            request_date=fields.date_text(record.get('requestDate')),
            technician=fields.text(record.get('technician')),
            description=fields.text(record.get('description')),
            cost=fields.number(record.get('cost')),
            status=MaintenanceStatus.coerce(record.get('status'), default=MaintenanceStatus.PENDING),
            attachment_url=fields.text(record.get('attachmentUrl')),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'assetId': self.asset_id,
            'assetName': self.asset_name,
            'type': self.type.value,
            'requestDate': self.request_date,
            'technician': self.technician,
            'description': self.description,
            'cost': self.cost,
            'attachmentUrl': self.attachment_url,
            'status': self.status.value,
        }
