"""
Tests for the physical count, list filters, statistics and CSV exports
"""
import csv
import io
from datetime import date

import pytest

from medequip.buisness.assets.audit_tracker import AuditSummary, AuditTracker
from medequip.data.core.asset import Asset
from medequip.data.core.check_record import CheckRecord
from medequip.data.core.maintenance_record import MaintenanceRecord
from medequip.data.core.statuses import AssetStatus, AuditStatus, CheckStatus, MaintenanceStatus, MaintenanceType
from medequip.services.assets.asset_service import ALL_DEPARTMENTS, AssetService
from medequip.services.core import ComplianceService, DashboardService
from medequip.services.exports import csv_export

ASSETS = [
    Asset(id='EQ-001', name='Vital Sign Monitor', serial_number='PH-VSM-001', department='ER', price=150000),
    Asset(id='EQ-002', name='Defibrillator', serial_number='ZL-DEF-889', department='ICU',
          status=AssetStatus.MAINTENANCE_DUE, price=350000.5),
    Asset(id='EQ-003', name='Infusion Pump, "Space"', serial_number='BB-INF-9921', department='ER',
          status=AssetStatus.REPAIR),
    Asset(id='EQ-004', name='Portable X-Ray', serial_number='FJ-XRAY-7721', department='Radiology',
          status=AssetStatus.LOANED),
]

RECORDS = [
    MaintenanceRecord(id='MT-1', asset_id='EQ-003', asset_name='Infusion Pump', type=MaintenanceType.CM,
                      request_date='2024-05-20', technician='Tech A', description='Door sensor', cost=2500),
    MaintenanceRecord(id='MT-2', asset_id='EQ-002', asset_name='Defibrillator', type=MaintenanceType.PM,
                      request_date='2024-05-28', technician='Tech B', description='Calibration', cost=1200,
                      status=MaintenanceStatus.COMPLETED),
]


@pytest.fixture
def audit(local_store):
    return AuditTracker(local_store)


def test_toggle_same_status_clears(audit):
    assert audit.toggle('EQ-001', AuditStatus.FOUND) == AuditStatus.FOUND
    assert audit.toggle('EQ-001', AuditStatus.FOUND) == AuditStatus.UNCHECKED
    assert audit.toggle('EQ-001', AuditStatus.MISSING) == AuditStatus.MISSING
    assert audit.toggle('EQ-001', AuditStatus.FOUND) == AuditStatus.FOUND
    assert audit.status_of('EQ-001') == AuditStatus.FOUND
    assert audit.status_of('EQ-999') == AuditStatus.UNCHECKED


def test_audit_summary_and_reset(audit):
    audit.toggle('EQ-001', AuditStatus.FOUND)
    audit.toggle('EQ-002', AuditStatus.MISSING)
    # Not in the filtered list, so not counted
    audit.toggle('EQ-999', AuditStatus.FOUND)

    summary = audit.summarize(ASSETS)
    assert (summary.total, summary.found, summary.missing, summary.checked) == (4, 1, 1, 2)
    assert summary.progress == 50

    audit.reset()
    assert audit.load() == {}
    assert audit.summarize(ASSETS).progress == 0


def test_audit_progress_rounding():
    assert AuditSummary(total=3, found=1, missing=0).progress == 33
    assert AuditSummary(total=3, found=2, missing=0).progress == 67
    assert AuditSummary(total=0, found=0, missing=0).progress == 0


def test_filter_assets():
    assert [a.id for a in AssetService.filter_assets(ASSETS, search='pump')] == ['EQ-003']
    assert [a.id for a in AssetService.filter_assets(ASSETS, search='eq-00', department='ER')] == ['EQ-001', 'EQ-003']
    assert [a.id for a in AssetService.filter_assets(ASSETS, search='XRAY-77')] == ['EQ-004']
    assert len(AssetService.filter_assets(ASSETS, department=ALL_DEPARTMENTS)) == 4
    assert AssetService.filter_assets(ASSETS, search='nothing matches') == []


def test_dashboard_stats():
    stats = DashboardService.get_stats(ASSETS)
    assert stats['total'] == 4
    assert stats['active'] == 1
    assert stats['maintenance'] == 2
    assert stats['loaned'] == 1
    assert stats['active_percent'] == 25
    assert {d['status'] for d in stats['distribution']} == {'Active', 'PM Due', 'Under Repair', 'Loaned'}

    assert DashboardService.get_stats([])['active_percent'] == 0


def test_recent_activity():
    checks = [
        CheckRecord(id=f'CHK-{i}', asset_id='EQ-001', asset_name='Monitor', date=f'2024-05-{i:02d}',
                    checker_name='Joy', status=CheckStatus.PASS)
        for i in range(1, 9)
    ]
    activity = DashboardService.get_recent_activity(checks, RECORDS)
    assert [c.id for c in activity['recent_checks']] == ['CHK-8', 'CHK-7', 'CHK-6', 'CHK-5', 'CHK-4']
    assert [r.id for r in activity['open_requests']] == ['MT-1']


def test_compliance_report():
    checks = [
        CheckRecord(id='CHK-1', asset_id='EQ-001', asset_name='A', date='2024-05-01', checker_name='J',
                    status=CheckStatus.PASS),
        CheckRecord(id='CHK-2', asset_id='EQ-001', asset_name='A', date='2024-05-02', checker_name='J',
                    status=CheckStatus.PASS),
        CheckRecord(id='CHK-3', asset_id='EQ-001', asset_name='A', date='2024-05-03', checker_name='J',
                    status=CheckStatus.FAIL),
    ]
    report = ComplianceService.get_report(ASSETS, checks, RECORDS)
    assert report['pass_rate'] == 67
    assert report['uptime_rate'] == 50
    assert report['failed_checks'] == 1
    assert (report['pm_count'], report['cm_count']) == (1, 1)
    assert report['costs'] == {'PM': 1200, 'CM': 2500, 'total': 3700}
    assert [r.id for r in report['records']] == ['MT-2', 'MT-1']

    empty = ComplianceService.get_report([], [], [])
    assert empty['pass_rate'] == 0 and empty['uptime_rate'] == 0


def _parse(text):
    assert text.startswith(csv_export.BOM)
    return list(csv.reader(io.StringIO(text[len(csv_export.BOM):])))


def test_assets_csv():
    text = csv_export.assets_csv(ASSETS)
    lines = text.split('\n')
    assert len(lines) == len(ASSETS) + 1
    assert lines[0] == csv_export.BOM + ','.join(csv_export.ASSET_HEADERS)
    # Text quoted, whole numbers unquoted
    assert lines[1].startswith('"EQ-001","Vital Sign Monitor"')
    assert ',150000,' in lines[1]
    assert ',350000.5,' in lines[2]

    rows = _parse(text)
    assert rows[3][1] == 'Infusion Pump, "Space"'
    assert rows[4][8] == 'Loaned'


def test_audit_csv_labels():
    progress = {'EQ-001': AuditStatus.FOUND, 'EQ-002': AuditStatus.MISSING}
    rows = _parse(csv_export.audit_csv(ASSETS, progress))
    assert rows[0] == csv_export.AUDIT_HEADERS
    assert [row[4] for row in rows[1:]] == ['Found', 'Missing', 'Not Checked', 'Not Checked']


def test_maintenance_and_compliance_csv():
    maintenance = _parse(csv_export.maintenance_csv(RECORDS))
    assert maintenance[1] == ['MT-1', '2024-05-20', 'Infusion Pump', 'CM', 'Door sensor', 'Pending', '2500']

    compliance = _parse(csv_export.compliance_csv(RECORDS))
    assert compliance[0] == csv_export.COMPLIANCE_HEADERS
    assert compliance[2][5] == 'Tech B'


def test_multiline_description_stays_on_one_line():
    records = [
        MaintenanceRecord(id='MT-9', asset_id='EQ-001', asset_name='Monitor', type=MaintenanceType.CM,
                          request_date='2024-06-01', technician='Tech A',
                          description='line one\nline two\r\nline three\rend', cost=0),
    ] + RECORDS
    text = csv_export.maintenance_csv(records)
    assert len(text.split('\n')) == len(records) + 1
    assert _parse(text)[1][4] == 'line one line two line three end'


def test_empty_export_is_header_only():
    text = csv_export.maintenance_csv([])
    assert text == csv_export.BOM + ','.join(csv_export.MAINTENANCE_HEADERS)


def test_export_filename():
    assert csv_export.export_filename('asset_register', date(2024, 6, 1)) == 'asset_register_2024-06-01.csv'
