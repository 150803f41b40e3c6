"""
Application settings document
Hospital branding, Telegram credentials, remote storage endpoint and the department list.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List
from urllib.parse import urlparse

from medequip.data.core import fields


DEFAULT_HOSPITAL_NAME = 'โรงพยาบาลแก้งคร้อ จ.ชัยภูมิ'
DEFAULT_DEPARTMENTS = ('ER', 'ICU', 'OPD', 'Radiology', 'Pediatrics', 'เวชกรรมฟื้นฟู')


def is_valid_endpoint(url: str) -> bool:
    """A remote endpoint must be an absolute https URL"""
    if not url:
        return False
    parsed = urlparse(url.strip())
    return parsed.scheme == 'https' and bool(parsed.netloc)


@dataclass
class AppSettings:
    hospital_name: str = DEFAULT_HOSPITAL_NAME
    logo_url: str = ''
    background_url: str = ''
    telegram_bot_token: str = ''
    telegram_chat_id: str = ''
    remote_endpoint_url: str = ''
    departments: List[str] = field(default_factory=lambda: list(DEFAULT_DEPARTMENTS))

    @property
    def uses_remote_storage(self) -> bool:
        return is_valid_endpoint(self.remote_endpoint_url)

    @property
    def telegram_configured(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "AppSettings":
        departments = record.get('departments')
        if not isinstance(departments, list):
            departments = list(DEFAULT_DEPARTMENTS)
        hospital_name = fields.text(record.get('hospitalName'))
        # The first releases stored a placeholder name
        if not hospital_name or hospital_name == 'MedEquip Manager':
            hospital_name = DEFAULT_HOSPITAL_NAME
        return cls(
            hospital_name=hospital_name,
            logo_url=fields.text(record.get('logoUrl')),
            background_url=fields.text(record.get('backgroundUrl')),
            telegram_bot_token=fields.text(record.get('telegramBotToken')),
            telegram_chat_id=fields.text(record.get('telegramChatId')),
            remote_endpoint_url=fields.text(record.get('googleScriptUrl')),
            departments=[fields.text(d) for d in departments if fields.text(d)],
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            'hospitalName': self.hospital_name,
            'logoUrl': self.logo_url,
            'backgroundUrl': self.background_url,
            'telegramBotToken': self.telegram_bot_token,
            'telegramChatId': self.telegram_chat_id,
            'googleScriptUrl': self.remote_endpoint_url,
            'departments': list(self.departments),
        }
