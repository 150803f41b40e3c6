"""
Asset Service
Presentation service for the asset register list.

Handles:
- Free-text search over name, id and serial number
- Department filter ('All' means no filter)
- Audit status lookup for count mode
"""

from typing import Dict, List, Optional

from flask import Request

from medequip.data.core.asset import Asset
from medequip.data.core.statuses import AuditStatus

ALL_DEPARTMENTS = 'All'


class AssetService:
    """
    Service for asset list presentation data.
    """

    @staticmethod
    def filter_assets(assets: List[Asset], search: Optional[str] = None,
                      department: Optional[str] = None) -> List[Asset]:
        """
        Apply the list filters.

        Args:
            assets: Assets already limited to the viewer
            search: Case-insensitive text matched against name, id and serial number
            department: Department name, or 'All'/empty for every department

        Returns:
            Matching assets in their original order
        """
        term = (search or '').strip().lower()
        results = []
        for asset in assets:
            if term and not (term in asset.name.lower()
                             or term in asset.id.lower()
                             or term in asset.serial_number.lower()):
                continue
            if department and department != ALL_DEPARTMENTS and asset.department != department:
                continue
            results.append(asset)
        return results

    @staticmethod
    def get_list_filters(request: Request) -> Dict[str, str]:
        return {
            'search': request.args.get('q', '').strip(),
            'department': request.args.get('department', ALL_DEPARTMENTS) or ALL_DEPARTMENTS,
        }

    @staticmethod
    def audit_statuses(assets: List[Asset], progress: Dict[str, AuditStatus]) -> Dict[str, AuditStatus]:
        return {asset.id: progress.get(asset.id, AuditStatus.UNCHECKED) for asset in assets}
