from dataclasses import dataclass
from typing import Any, Dict, Optional

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from medequip.data.core import fields
from medequip.data.core.statuses import UserRole


@dataclass(eq=False)
class RegisteredUser(UserMixin):
    username: str
    password_hash: str
    role: UserRole = UserRole.STAFF
    department: Optional[str] = None

    @classmethod
    def create(cls, username: str, password: str, role: UserRole = UserRole.STAFF,
               department: Optional[str] = None) -> "RegisteredUser":
        user = cls(username=username, password_hash='', role=role, department=department or None)
        user.set_password(password)
        return user

    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        if not self.password_hash or not password:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def get_id(self):
        return self.username

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "RegisteredUser":
        password_hash = fields.text(record.get('passwordHash'))
        user = cls(
            username=fields.text(record.get('username')),
            password_hash=password_hash,
            role=UserRole.coerce(record.get('role'), default=UserRole.STAFF),
            department=fields.optional_text(record.get('department')),
        )
        # Rows written before hashing carry the plaintext password
        if not password_hash and record.get('password'):
            user.set_password(fields.text(record.get('password')))
        return user

    def to_record(self) -> Dict[str, Any]:
        record = {
            'username': self.username,
            'passwordHash': self.password_hash,
            'role': self.role.value,
        }
        if self.department:
            record['department'] = self.department
        return record

    def __repr__(self):
        return f'<RegisteredUser {self.username}>'
