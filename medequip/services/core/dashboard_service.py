"""
Dashboard Service
Asset status statistics for the landing page.
"""

from typing import Any, Dict, List

from medequip.data.core.asset import Asset
from medequip.data.core.check_record import CheckRecord
from medequip.data.core.maintenance_record import MaintenanceRecord
from medequip.data.core.statuses import ASSET_STATUS_LABELS, AssetStatus, MaintenanceStatus


class DashboardService:

    @staticmethod
    def get_stats(assets: List[Asset]) -> Dict[str, Any]:
        """
        Count assets per status.

        Returns:
            Dict with total, active, maintenance (PM due + under repair), loaned,
            disposed, active_percent and the non-empty status distribution
        """
        counts = {status: 0 for status in AssetStatus}
        for asset in assets:
            counts[asset.status] += 1

        total = len(assets)
        active = counts[AssetStatus.ACTIVE]
        distribution = [
            {'status': status.value, 'label': ASSET_STATUS_LABELS[status], 'count': count}
            for status, count in counts.items()
            if count > 0
        ]
        return {
            'total': total,
            'active': active,
            'maintenance': counts[AssetStatus.MAINTENANCE_DUE] + counts[AssetStatus.REPAIR],
            'loaned': counts[AssetStatus.LOANED],
            'disposed': counts[AssetStatus.DISPOSED],
            'active_percent': round(active / total * 100) if total else 0,
            'distribution': distribution,
        }

    @staticmethod
    def get_recent_activity(checks: List[CheckRecord], maintenance: List[MaintenanceRecord],
                            limit: int = 5) -> Dict[str, List]:
        open_requests = [r for r in maintenance if r.status != MaintenanceStatus.COMPLETED]
        return {
            'recent_checks': sorted(checks, key=lambda c: c.date, reverse=True)[:limit],
            'open_requests': open_requests[:limit],
        }
