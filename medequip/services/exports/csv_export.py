"""
CSV Export
Spreadsheet-friendly exports of the register, audit, maintenance and compliance views.

Format: UTF-8 with a leading BOM (so Excel detects the encoding), comma
separated, text fields double-quoted, numbers unquoted, one header row and one
line per record.
"""

import csv
import io
import re
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from medequip.buisness.assets.audit_tracker import AUDIT_LABELS
from medequip.data.core.asset import Asset
from medequip.data.core.maintenance_record import MaintenanceRecord
from medequip.data.core.statuses import AuditStatus

BOM = '\ufeff'

ASSET_HEADERS = ['ID', 'Name', 'Brand', 'Model', 'Serial Number', 'Department',
                 'Purchase Date', 'Price', 'Status', 'Next PM']
AUDIT_HEADERS = ['ID', 'Name', 'Serial Number', 'Department', 'Audit Status']
MAINTENANCE_HEADERS = ['ID', 'Date', 'Asset', 'Type', 'Description', 'Status', 'Cost']
COMPLIANCE_HEADERS = ['ID', 'Date', 'Asset Name', 'Type', 'Description', 'Technician', 'Status']


def _number(value: float):
    return int(value) if float(value).is_integer() else value


def _cell(value):
    if value is None:
        return ''
    if isinstance(value, str):
        # One physical line per record
        return re.sub(r'\r\n|\r|\n', ' ', value)
    return value


def build_csv(headers: Sequence[str], rows: Iterable[Sequence]) -> str:
    """Render rows as BOM-prefixed CSV text without a trailing newline"""
    buffer = io.StringIO()
    buffer.write(','.join(headers) + '\n')
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator='\n')
    for row in rows:
        writer.writerow([_cell(value) for value in row])
    return BOM + buffer.getvalue().rstrip('\n')


def export_filename(prefix: str, export_date: Optional[date] = None) -> str:
    return f"{prefix}_{(export_date or date.today()).isoformat()}.csv"


def assets_csv(assets: List[Asset]) -> str:
    return build_csv(ASSET_HEADERS, (
        [a.id, a.name, a.brand, a.model, a.serial_number, a.department,
         a.purchase_date, _number(a.price), a.status.value, a.next_pm_date]
        for a in assets
    ))


def audit_csv(assets: List[Asset], progress: Dict[str, AuditStatus]) -> str:
    return build_csv(AUDIT_HEADERS, (
        [a.id, a.name, a.serial_number, a.department,
         AUDIT_LABELS[progress.get(a.id, AuditStatus.UNCHECKED)]]
        for a in assets
    ))


def maintenance_csv(records: List[MaintenanceRecord]) -> str:
    return build_csv(MAINTENANCE_HEADERS, (
        [r.id, r.request_date, r.asset_name, r.type.value, r.description,
         r.status.value, _number(r.cost)]
        for r in records
    ))


def compliance_csv(records: List[MaintenanceRecord]) -> str:
    return build_csv(COMPLIANCE_HEADERS, (
        [r.id, r.request_date, r.asset_name, r.type.value, r.description,
         r.technician, r.status.value]
        for r in records
    ))
