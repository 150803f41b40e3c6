"""
Inline data-URI encoding for uploaded files (maintenance attachments, logo, background)
"""

import base64
import mimetypes
from typing import Optional

from werkzeug.datastructures import FileStorage

from medequip.utils.logger import get_logger

logger = get_logger("medequip.utils.data_uri")

DEFAULT_MIMETYPE = 'application/octet-stream'


def file_to_data_uri(upload: Optional[FileStorage]) -> str:
    """
    Read an uploaded file into a data URI.

    Returns:
        '' when no file was chosen
    """
    if upload is None or not upload.filename:
        return ''

    content = upload.read()
    if not content:
        return ''

    mimetype = upload.mimetype or mimetypes.guess_type(upload.filename)[0] or DEFAULT_MIMETYPE
    encoded = base64.b64encode(content).decode('ascii')
    logger.debug(f"Encoded upload {upload.filename} ({mimetype}, {len(content)} bytes)")
    return f"data:{mimetype};base64,{encoded}"
