"""
Service Registry
Builds the domain services for the current request.

Settings are loaded once per request; the storage mode and the notifier are
derived from them and injected into every domain service, so a settings change
takes effect on the next request.
"""

from dataclasses import dataclass
from typing import Optional

from flask import current_app, g

from medequip.buisness.assets.asset_manager import AssetManager
from medequip.buisness.assets.audit_tracker import AuditTracker
from medequip.buisness.checks.check_manager import CheckManager
from medequip.buisness.core.backup_manager import BackupManager
from medequip.buisness.core.settings_store import SettingsStore
from medequip.buisness.core.user_directory import UserDirectory
from medequip.buisness.loans.loan_manager import LoanManager
from medequip.buisness.maintenance.maintenance_manager import MaintenanceManager
from medequip.buisness.notifications.notifier import Notifier, TelegramNotifier
from medequip.data.core.app_settings import AppSettings
from medequip.data.storage import select_store
from medequip.data.storage.base import CollectionStore
from medequip.data.storage.local_store import LocalCollectionStore


@dataclass
class DomainServices:
    settings_store: SettingsStore
    settings: AppSettings
    local_store: LocalCollectionStore
    store: CollectionStore
    notifier: Notifier
    users: UserDirectory
    assets: AssetManager
    audit: AuditTracker
    checks: CheckManager
    maintenance: MaintenanceManager
    loans: LoanManager
    backup: BackupManager

    @property
    def storage_mode(self) -> str:
        return self.store.mode


def build_services(config, notifier: Optional[Notifier] = None) -> DomainServices:
    """
    Assemble the services from an application config mapping.

    Args:
        config: Flask config (or any mapping with the same keys)
        notifier: Replacement notification sink; built from the settings when omitted
    """
    local_store = LocalCollectionStore(seed_samples=config.get('SEED_SAMPLE_DATA', True))
    settings_store = SettingsStore(local_store)
    settings = settings_store.load()

    store = select_store(settings, local_store, timeout=config.get('REMOTE_TIMEOUT_SECONDS', 15.0))
    if notifier is None:
        notifier = TelegramNotifier(
            settings.telegram_bot_token,
            settings.telegram_chat_id,
            timeout=config.get('TELEGRAM_TIMEOUT_SECONDS', 10.0),
        )

    assets = AssetManager(store)
    return DomainServices(
        settings_store=settings_store,
        settings=settings,
        local_store=local_store,
        store=store,
        notifier=notifier,
        users=UserDirectory(local_store, settings_store, admin_password=config.get('ADMIN_PASSWORD', 'admin1234')),
        assets=assets,
        audit=AuditTracker(local_store),
        checks=CheckManager(store, assets, notifier,
                            summary_departments=config.get('DAILY_SUMMARY_DEPARTMENTS', ('เวชกรรมฟื้นฟู',))),
        maintenance=MaintenanceManager(store, assets, notifier),
        loans=LoanManager(store, assets),
        backup=BackupManager(store, local_store),
    )


def get_services() -> DomainServices:
    """Services for the current request, built on first use"""
    if 'services' not in g:
        g.services = build_services(current_app.config, notifier=current_app.extensions.get('medequip.notifier'))
    return g.services
