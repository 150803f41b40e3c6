"""
Logging Sanitizer Utility

Provides utilities to sanitize sensitive data before logging.
Prevents accidental logging of passwords, bot tokens and inline file payloads.
"""

from typing import Dict, Any
from werkzeug.datastructures import MultiDict


# Fields that should never be logged
SENSITIVE_FIELDS = {
    'password',
    'confirm_password',
    'password_hash',
    'passwordhash',
    'secret',
    'token',
    'csrf_token',
    'telegram_bot_token',
    'telegrambottoken',
    'bot_token',
    'api_key',
}

# Fields whose values are inline data-URIs; logged as their size only
BULKY_FIELDS = {
    'attachment_url',
    'attachmenturl',
    'logo_url',
    'logourl',
    'background_url',
    'backgroundurl',
    'image',
}


def _summarize_bulky(value: Any) -> Any:
    if isinstance(value, str) and value.startswith('data:'):
        return f'[DATA-URI {len(value)} chars]'
    return value


def sanitize_dict(data: Dict[str, Any], redact_text: str = '[REDACTED]') -> Dict[str, Any]:
    """
    Sanitize a dictionary by replacing sensitive field values with redaction text.

    Args:
        data: Dictionary to sanitize
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        Sanitized dictionary with sensitive values replaced

    Example:
        >>> sanitize_dict({'username': 'admin', 'password': 'secret123'})
        {'username': 'admin', 'password': '[REDACTED]'}
    """
    if not data:
        return data

    sanitized = {}
    for key, value in data.items():
        lowered = key.lower()
        if lowered in SENSITIVE_FIELDS:
            sanitized[key] = redact_text
        elif lowered in BULKY_FIELDS:
            sanitized[key] = _summarize_bulky(value)
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, redact_text)
        else:
            sanitized[key] = value

    return sanitized


def sanitize_form_data(form_data: MultiDict, redact_text: str = '[REDACTED]') -> Dict[str, Any]:
    """
    Sanitize Flask request.form data for safe logging.

    Args:
        form_data: Flask request.form
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        Plain dictionary with sensitive values replaced
    """
    if not form_data:
        return {}

    return sanitize_dict(form_data.to_dict(flat=True), redact_text)
