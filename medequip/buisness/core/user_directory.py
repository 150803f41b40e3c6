"""
User Directory
Registration and login for the locally stored user list.
"""

from typing import List, Optional

from medequip.buisness.core.settings_store import SettingsStore
from medequip.data.core.registered_user import RegisteredUser
from medequip.data.core.statuses import UserRole
from medequip.data.storage.base import Document
from medequip.data.storage.local_store import LocalCollectionStore
from medequip.errors import ValidationError
from medequip.utils.logger import get_logger

logger = get_logger("medequip.buisness.users")

DEFAULT_ADMIN_USERNAME = 'admin'


class UserDirectory:
    """
    Users are kept in one local document. The built-in admin account is
    always present, even if the stored list lost it.
    """

    def __init__(self, local_store: LocalCollectionStore, settings_store: SettingsStore,
                 admin_password: str = 'admin1234'):
        self._local = local_store
        self._settings = settings_store
        self._admin_password = admin_password

    def list_users(self) -> List[RegisteredUser]:
        rows = [row for row in self._local.read_document(Document.USERS, default=[]) if isinstance(row, dict)]
        users = [RegisteredUser.from_record(row) for row in rows]
        # Plaintext rows are hashed on read, persist that once
        upgraded = any(not row.get('passwordHash') and row.get('password') for row in rows)
        restored = not any(u.username == DEFAULT_ADMIN_USERNAME for u in users)
        if restored:
            users.append(RegisteredUser.create(DEFAULT_ADMIN_USERNAME, self._admin_password, role=UserRole.ADMIN))
            logger.info("Built-in admin account restored")
        if upgraded:
            logger.info("Stored plaintext passwords replaced with hashes")
        if restored or upgraded:
            self._local.write_document(Document.USERS, [u.to_record() for u in users])
        return users

    def get(self, username: str) -> Optional[RegisteredUser]:
        for user in self.list_users():
            if user.username == username:
                return user
        return None

    def register(self, username: str, password: str, department: Optional[str] = None,
                 role: UserRole = UserRole.STAFF) -> bool:
        """
        Register a new user.

        Returns:
            False if the username is already taken (exact, case-sensitive match)

        Raises:
            ValidationError: If username or password is missing
        """
        username = (username or '').strip()
        if not username or not password:
            raise ValidationError('กรุณากรอกชื่อผู้ใช้งานและรหัสผ่าน')

        users = self.list_users()
        if any(u.username == username for u in users):
            logger.warning(f"Registration rejected, username already exists: {username}")
            return False

        department = (department or '').strip() or None
        users.append(RegisteredUser.create(username, password, role=role, department=department))
        self._local.write_document(Document.USERS, [u.to_record() for u in users])
        logger.info(f"Registered user {username} ({role.value}, department={department})")

        if department and not self._settings.add_department(department) and not self._settings.exists():
            # fresh install: persist the defaults, which already list this department
            self._settings.save(self._settings.load())
        return True

    def authenticate(self, username: str, password: str) -> Optional[RegisteredUser]:
        user = self.get(username)
        if user is None or not user.check_password(password):
            return None
        return user
