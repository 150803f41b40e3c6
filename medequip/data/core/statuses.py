"""
Status and type enumerations for the equipment records.

Enum values are the strings stored in the collections, which keeps existing
spreadsheet rows readable.
"""

from enum import Enum


class _StoredEnum(str, Enum):

    @classmethod
    def coerce(cls, value, default=None):
        """Map a stored value onto the enum, falling back to default for unknown values"""
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value or member.name == value:
                return member
        if default is None:
            raise ValueError(f"Unknown {cls.__name__}: {value!r}")
        return default

    def __str__(self):
        return self.value


class AssetStatus(_StoredEnum):
    ACTIVE = 'Active'
    REPAIR = 'Under Repair'
    MAINTENANCE_DUE = 'PM Due'
    LOANED = 'Loaned'
    DISPOSED = 'Disposed'


class CheckStatus(_StoredEnum):
    PASS = 'Pass'
    FAIL = 'Fail'


class MaintenanceType(_StoredEnum):
    PM = 'PM'
    CM = 'CM'


class MaintenanceStatus(_StoredEnum):
    PENDING = 'Pending'
    IN_PROGRESS = 'In Progress'
    COMPLETED = 'Completed'


class LoanStatus(_StoredEnum):
    ACTIVE = 'Active'
    OVERDUE = 'Overdue'
    RETURNED = 'Returned'


class UserRole(_StoredEnum):
    ADMIN = 'Admin'
    STAFF = 'Staff'


class AuditStatus(_StoredEnum):
    FOUND = 'found'
    MISSING = 'missing'
    UNCHECKED = 'unchecked'


# Thai labels shown in the UI
ASSET_STATUS_LABELS = {
    AssetStatus.ACTIVE: 'พร้อมใช้',
    AssetStatus.REPAIR: 'ส่งซ่อม',
    AssetStatus.MAINTENANCE_DUE: 'ถึงรอบ PM',
    AssetStatus.LOANED: 'ถูกยืม',
    AssetStatus.DISPOSED: 'จำหน่าย',
}
