"""
Asset record
A piece of registered medical equipment.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict

from medequip.data.core import fields
from medequip.data.core.statuses import AssetStatus


@dataclass
class Asset:
    """
    Registered equipment item.

    Stored as a flat camelCase row (the shape the spreadsheet endpoint uses);
    conversion happens in from_record / to_record only.
    """

    id: str
    name: str
    serial_number: str
    brand: str = ''
    model: str = ''
    department: str = ''
    purchase_date: str = ''
    price: float = 0.0
    status: AssetStatus = AssetStatus.ACTIVE
    next_pm_date: str = ''
    manual_url: str = ''
    google_drive_url: str = ''
    image: str = ''

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Asset":
        """Build Asset from a stored row."""
        return cls(
            id=fields.text(record.get('id')),
            name=fields.text(record.get('name')),
            serial_number=fields.text(record.get('serialNumber')),
            brand=fields.text(record.get('brand')),
            model=fields.text(record.get('model')),
            department=fields.text(record.get('department')),
            purchase_date=fields.date_text(record.get('purchaseDate')),
            price=fields.number(record.get('price')),
            status=AssetStatus.coerce(record.get('status'), default=AssetStatus.ACTIVE),
            next_pm_date=fields.date_text(record.get('nextPmDate')),
            manual_url=fields.text(record.get('manualUrl')),
            google_drive_url=fields.text(record.get('googleDriveUrl')),
            image=fields.text(record.get('image')),
        )

    def to_record(self) -> Dict[str, Any]:
        """Convert to a stored row for create/update."""
        return {
            'id': self.id,
            'name': self.name,
            'brand': self.brand,
            'model': self.model,
            'serialNumber': self.serial_number,
            'department': self.department,
            'purchaseDate': self.purchase_date,
            'price': self.price,
            'status': self.status.value,
            'nextPmDate': self.next_pm_date,
            'manualUrl': self.manual_url,
            'googleDriveUrl': self.google_drive_url,
            'image': self.image,
        }

    def with_status(self, status: AssetStatus) -> "Asset":
        return replace(self, status=status)

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"
