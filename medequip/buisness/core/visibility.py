"""
Department visibility policy

Staff users attached to a department only see that department's assets and
the records (checks, maintenance, loans) that point at those assets. Admins,
staff without a department and system callers (viewer=None) see everything.
"""

from typing import Iterable, List, Optional, Set, TypeVar

from medequip.data.core.asset import Asset
from medequip.data.core.statuses import UserRole

RecordT = TypeVar('RecordT')


def restricted_department(viewer) -> Optional[str]:
    """Department the viewer is limited to, or None for unrestricted viewers"""
    if viewer is None:
        return None
    if UserRole.coerce(getattr(viewer, 'role', None), default=UserRole.STAFF) != UserRole.STAFF:
        return None
    return getattr(viewer, 'department', None) or None


def visible_assets(viewer, assets: Iterable[Asset]) -> List[Asset]:
    department = restricted_department(viewer)
    if department is None:
        return list(assets)
    return [asset for asset in assets if asset.department == department]


def visible_asset_ids(viewer, assets: Iterable[Asset]) -> Set[str]:
    return {asset.id for asset in visible_assets(viewer, assets)}


def visible_records(viewer, records: Iterable[RecordT], assets: Iterable[Asset]) -> List[RecordT]:
    """Filter records carrying an asset_id down to the viewer's assets"""
    if restricted_department(viewer) is None:
        return list(records)
    allowed = visible_asset_ids(viewer, assets)
    return [record for record in records if record.asset_id in allowed]
