"""
Tests for repair requests, PM reports and the upcoming PM scan
"""
from datetime import date, timedelta

import pytest

from medequip.buisness.maintenance.maintenance_manager import (
    DEFAULT_TECHNICIAN, MaintenanceManager, PM_ALERT_WINDOW_DAYS,
)
from medequip.data.core.asset import Asset
from medequip.data.core.statuses import AssetStatus, MaintenanceStatus, MaintenanceType
from medequip.data.storage.base import Collection
from medequip.errors import ValidationError
from medequip.test.conftest import RecordingNotifier, StubViewer

TODAY = date(2024, 6, 1)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def maintenance(local_store, asset_manager, notifier):
    asset_manager.create(Asset(id='EQ-0001', name='Portable X-Ray', serial_number='XR-1',
                               department='Radiology', status=AssetStatus.ACTIVE))
    return MaintenanceManager(local_store, asset_manager, notifier)


def _pm_asset(asset_manager, asset_id, days_ahead):
    next_pm = (TODAY + timedelta(days=days_ahead)).isoformat() if days_ahead is not None else ''
    asset_manager.create(Asset(id=asset_id, name=f'Device {asset_id}', serial_number=f'SN-{asset_id}',
                               next_pm_date=next_pm))


def test_repair_request_marks_asset_under_repair(maintenance, asset_manager, notifier):
    record = maintenance.request_repair('EQ-0001', 'Arm movement stuck', cost='2,500', request_date=TODAY)

    assert record.type == MaintenanceType.CM
    assert record.status == MaintenanceStatus.PENDING
    assert record.technician == DEFAULT_TECHNICIAN
    assert record.cost == 2500.0
    assert record.request_date == '2024-06-01'
    assert record.id.startswith('MT-')
    assert asset_manager.get('EQ-0001').status == AssetStatus.REPAIR
    assert len(notifier.messages) == 1
    assert 'Arm movement stuck' in notifier.messages[0]


def test_pm_report_leaves_status_alone(maintenance, asset_manager, notifier, local_store):
    record = maintenance.record_pm('EQ-0001', 'Annual calibration', technician='Somchai', cost=1200)

    assert record.type == MaintenanceType.PM
    assert record.status == MaintenanceStatus.COMPLETED
    assert record.technician == 'Somchai'
    assert asset_manager.get('EQ-0001').status == AssetStatus.ACTIVE
    assert notifier.messages == []
    assert local_store.list(Collection.MAINTENANCE)[0]['type'] == 'PM'


def test_attachment_is_kept(maintenance):
    record = maintenance.request_repair('EQ-0001', 'Cracked housing', attachment_url='data:image/png;base64,AAAA')
    assert record.has_attachment
    assert maintenance.all()[0].attachment_url == 'data:image/png;base64,AAAA'


def test_description_required(maintenance, asset_manager, local_store, notifier):
    with pytest.raises(ValidationError):
        maintenance.request_repair('EQ-0001', '   ')
    assert local_store.list(Collection.MAINTENANCE) == []
    assert asset_manager.get('EQ-0001').status == AssetStatus.ACTIVE
    assert notifier.messages == []


def test_unknown_or_hidden_asset_rejected(maintenance):
    with pytest.raises(ValidationError):
        maintenance.request_repair('', 'Broken')
    with pytest.raises(ValidationError):
        maintenance.record_pm('EQ-9999', 'PM')
    with pytest.raises(ValidationError):
        maintenance.request_repair('EQ-0001', 'Broken', viewer=StubViewer(department='ER'))


@pytest.mark.parametrize('days_ahead,alerted', [
    (-1, False),
    (0, True),
    (PM_ALERT_WINDOW_DAYS, True),
    (PM_ALERT_WINDOW_DAYS + 1, False),
    (None, False),
])
def test_pm_window_boundaries(local_store, asset_manager, days_ahead, alerted):
    notifier = RecordingNotifier()
    _pm_asset(asset_manager, 'EQ-0100', days_ahead)

    hits = MaintenanceManager(local_store, asset_manager, notifier).check_upcoming_pms(TODAY)

    assert bool(hits) is alerted
    assert len(notifier.messages) == (1 if alerted else 0)


def test_pm_scan_reports_each_asset_once(local_store, asset_manager):
    notifier = RecordingNotifier()
    _pm_asset(asset_manager, 'EQ-0101', 3)
    _pm_asset(asset_manager, 'EQ-0102', 10)

    hits = MaintenanceManager(local_store, asset_manager, notifier).check_upcoming_pms(TODAY)

    assert [(h.asset.id, h.days_left) for h in hits] == [('EQ-0101', 3)]
    assert len(notifier.messages) == 1
    assert 'อีก 3 วัน' in notifier.messages[0]


def test_list_filtered_by_department(maintenance, asset_manager):
    asset_manager.create(Asset(id='EQ-0002', name='Monitor', serial_number='M-1', department='ER'))
    maintenance.record_pm('EQ-0001', 'PM')
    maintenance.record_pm('EQ-0002', 'PM')

    assert [r.asset_id for r in maintenance.list(StubViewer(department='ER'))] == ['EQ-0002']
    assert len(maintenance.list()) == 2
