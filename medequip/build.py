#!/usr/bin/env python3
"""
Database build helpers for the equipment dashboard
Creates the local store table and makes sure the critical documents exist
"""

from medequip import db
from medequip.utils.logger import get_logger

logger = get_logger("medequip.build")


def verify_critical_data(config):
    """
    Make sure the settings document and the built-in admin account are stored.

    Args:
        config: Application config (admin password, sample-data flag)

    Returns:
        bool: True if anything had to be written
    """
    from medequip.buisness.core.service_registry import build_services
    from medequip.buisness.core.user_directory import DEFAULT_ADMIN_USERNAME
    from medequip.data.storage.base import Document

    services = build_services(config)
    changed = False

    if not services.settings_store.exists():
        services.settings_store.save(services.settings)
        logger.info("Default settings written")
        changed = True

    stored_users = services.local_store.read_document(Document.USERS, default=[])
    if not any(row.get('username') == DEFAULT_ADMIN_USERNAME for row in stored_users if isinstance(row, dict)):
        users = services.users.list_users()
        services.local_store.write_document(Document.USERS, [u.to_record() for u in users])
        logger.info("Built-in admin account written")
        changed = True

    return changed


def clear_local_data():
    """Drop every stored collection and document; sample records are served again afterwards"""
    from medequip.data.storage.stored_collection import StoredCollection

    deleted = StoredCollection.query.delete()
    db.session.commit()
    logger.warning(f"Cleared {deleted} stored collection(s) from the local store")
    return deleted


def build_database(app, reset=False):
    """
    Create tables and verify critical data.

    Args:
        app: Flask application
        reset: Delete all local data first
    """
    with app.app_context():
        db.create_all()
        logger.debug("Tables created")

        if reset:
            clear_local_data()

        if verify_critical_data(app.config):
            logger.info("Critical data inserted")
        else:
            logger.debug("Critical data already present")
