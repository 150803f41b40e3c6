"""
Asset Manager
Registry operations for equipment records.

Handles:
- Department-filtered listing through the visibility policy
- Required-field validation before anything reaches the store
- EQ-#### id assignment for new assets
"""

from dataclasses import replace
from typing import List, Optional

from medequip.buisness.core.record_ids import random_record_id
from medequip.buisness.core.visibility import visible_assets
from medequip.data.core.asset import Asset
from medequip.data.core.statuses import AssetStatus
from medequip.data.storage.base import Collection, CollectionStore
from medequip.errors import RecordNotFoundError, ValidationError
from medequip.utils.logger import get_logger

logger = get_logger("medequip.buisness.assets")

ASSET_ID_PREFIX = 'EQ'


class AssetManager:

    def __init__(self, store: CollectionStore):
        self._store = store

    def all(self) -> List[Asset]:
        """Every asset in storage, ignoring visibility"""
        return [Asset.from_record(row) for row in self._store.list(Collection.ASSETS)]

    def list(self, viewer=None) -> List[Asset]:
        return visible_assets(viewer, self.all())

    def get(self, asset_id: str, viewer=None) -> Asset:
        """
        Fetch one asset visible to the viewer.

        Raises:
            RecordNotFoundError: If no such asset is visible
        """
        for asset in self.list(viewer):
            if asset.id == asset_id:
                return asset
        raise RecordNotFoundError(Collection.ASSETS.value, asset_id)

    def departments(self, viewer=None) -> List[str]:
        """Departments that appear on the viewer's assets, in first-seen order"""
        seen = []
        for asset in self.list(viewer):
            if asset.department and asset.department not in seen:
                seen.append(asset.department)
        return seen

    def create(self, asset: Asset) -> Asset:
        """
        Register a new asset.

        The id is generated only when left blank. There is no collision check
        beyond what the store itself enforces.
        """
        self._validate(asset)
        if not asset.id:
            asset = replace(asset, id=random_record_id(ASSET_ID_PREFIX))
        self._store.create(Collection.ASSETS, asset.to_record())
        logger.info(f"Asset created: {asset} [{asset.status.value}]")
        return asset

    def update(self, asset: Asset) -> Asset:
        self._validate(asset)
        if not asset.id:
            raise ValidationError('ไม่พบรหัสครุภัณฑ์ที่ต้องการแก้ไข')
        self._store.update(Collection.ASSETS, asset.to_record())
        logger.info(f"Asset updated: {asset} [{asset.status.value}]")
        return asset

    def set_status(self, asset: Asset, status: AssetStatus) -> Asset:
        return self.update(asset.with_status(status))

    def delete(self, asset_id: str) -> None:
        self._store.delete(Collection.ASSETS, asset_id)
        logger.info(f"Asset deleted: {asset_id}")

    @staticmethod
    def _validate(asset: Asset) -> None:
        if not (asset.name or '').strip() or not (asset.serial_number or '').strip():
            raise ValidationError('กรุณากรอกชื่อและ Serial Number')
