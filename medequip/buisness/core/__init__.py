from medequip.buisness.core.visibility import visible_assets, visible_records, restricted_department
from medequip.buisness.core.settings_store import SettingsStore
from medequip.buisness.core.user_directory import UserDirectory
from medequip.buisness.core.backup_manager import BackupManager
