from medequip.buisness.assets.asset_manager import AssetManager
from medequip.buisness.assets.audit_tracker import AuditTracker, AuditSummary, AUDIT_LABELS
