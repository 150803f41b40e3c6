"""
Record types stored in the collections
"""

from medequip.data.core.statuses import (
    AssetStatus, CheckStatus, MaintenanceType, MaintenanceStatus,
    LoanStatus, UserRole, AuditStatus,
)
from medequip.data.core.asset import Asset
from medequip.data.core.check_record import CheckRecord, ChecklistDetails, CHECKLIST_ITEMS
from medequip.data.core.maintenance_record import MaintenanceRecord
from medequip.data.core.loan_record import LoanRecord
from medequip.data.core.registered_user import RegisteredUser
from medequip.data.core.app_settings import AppSettings
