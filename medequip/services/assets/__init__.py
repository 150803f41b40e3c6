from .asset_service import AssetService, ALL_DEPARTMENTS

__all__ = [
    'AssetService',
    'ALL_DEPARTMENTS',
]
