"""
Compliance Service
Quality indicators for the compliance report page.
"""

from typing import Any, Dict, List

from medequip.data.core.asset import Asset
from medequip.data.core.check_record import CheckRecord
from medequip.data.core.maintenance_record import MaintenanceRecord
from medequip.data.core.statuses import AssetStatus, MaintenanceType

DOWN_STATUSES = (AssetStatus.MAINTENANCE_DUE, AssetStatus.REPAIR)


class ComplianceService:

    @staticmethod
    def pass_rate(checks: List[CheckRecord]) -> int:
        if not checks:
            return 0
        return round(sum(1 for c in checks if c.passed) / len(checks) * 100)

    @staticmethod
    def uptime_rate(assets: List[Asset]) -> int:
        """Percent of assets that are neither due for PM nor under repair"""
        if not assets:
            return 0
        up = sum(1 for a in assets if a.status not in DOWN_STATUSES)
        return round(up / len(assets) * 100)

    @staticmethod
    def cost_totals(records: List[MaintenanceRecord]) -> Dict[str, float]:
        totals = {maintenance_type.value: 0.0 for maintenance_type in MaintenanceType}
        for record in records:
            totals[record.type.value] += record.cost
        totals['total'] = sum(r.cost for r in records)
        return totals

    @staticmethod
    def sorted_records(records: List[MaintenanceRecord]) -> List[MaintenanceRecord]:
        """Newest first"""
        return sorted(records, key=lambda r: r.request_date, reverse=True)

    @classmethod
    def get_report(cls, assets: List[Asset], checks: List[CheckRecord],
                   maintenance: List[MaintenanceRecord]) -> Dict[str, Any]:
        return {
            'pass_rate': cls.pass_rate(checks),
            'uptime_rate': cls.uptime_rate(assets),
            'check_count': len(checks),
            'failed_checks': sum(1 for c in checks if not c.passed),
            'pm_count': sum(1 for r in maintenance if r.type == MaintenanceType.PM),
            'cm_count': sum(1 for r in maintenance if r.type == MaintenanceType.CM),
            'costs': cls.cost_totals(maintenance),
            'records': cls.sorted_records(maintenance),
        }
