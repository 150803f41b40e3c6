"""
Tests for the asset register and department visibility
"""
import re
from dataclasses import replace

import pytest

from medequip.buisness.core import visibility
from medequip.data.core.asset import Asset
from medequip.data.core.statuses import AssetStatus
from medequip.errors import RecordNotFoundError, ValidationError
from medequip.test.conftest import StubViewer


def _asset(asset_id, department='ER', status=AssetStatus.ACTIVE, **kwargs):
    return Asset(id=asset_id, name=kwargs.pop('name', f'Device {asset_id}'),
                 serial_number=kwargs.pop('serial_number', f'SN-{asset_id}'),
                 department=department, status=status, **kwargs)


@pytest.fixture
def registered(asset_manager):
    asset_manager.create(_asset('EQ-0001', department='ER'))
    asset_manager.create(_asset('EQ-0002', department='ICU'))
    asset_manager.create(_asset('EQ-0003', department='ER'))
    return asset_manager


def test_create_generates_id_when_blank(asset_manager):
    asset = asset_manager.create(Asset(id='', name='Syringe Pump', serial_number='SP-77'))
    assert re.fullmatch(r'EQ-\d{4}', asset.id)
    assert asset_manager.get(asset.id).name == 'Syringe Pump'


def test_create_keeps_given_id(asset_manager):
    asset = asset_manager.create(_asset('EQ-CUSTOM'))
    assert asset.id == 'EQ-CUSTOM'


@pytest.mark.parametrize('name,serial', [('', 'SN-1'), ('Pump', ''), ('   ', 'SN-1')])
def test_create_requires_name_and_serial(asset_manager, name, serial):
    with pytest.raises(ValidationError):
        asset_manager.create(Asset(id='', name=name, serial_number=serial))
    assert asset_manager.all() == []


def test_update_and_set_status(registered):
    asset = registered.get('EQ-0002')
    registered.update(replace(asset, brand='Mindray'))
    assert registered.get('EQ-0002').brand == 'Mindray'

    registered.set_status(registered.get('EQ-0002'), AssetStatus.DISPOSED)
    assert registered.get('EQ-0002').status == AssetStatus.DISPOSED


def test_update_without_id_rejected(registered):
    with pytest.raises(ValidationError):
        registered.update(Asset(id='', name='X', serial_number='Y'))


def test_delete(registered):
    registered.delete('EQ-0001')
    with pytest.raises(RecordNotFoundError):
        registered.get('EQ-0001')
    assert len(registered.all()) == 2


def test_staff_sees_only_own_department(registered):
    er_nurse = StubViewer(department='ER')
    assert {a.id for a in registered.list(er_nurse)} == {'EQ-0001', 'EQ-0003'}
    assert registered.departments(er_nurse) == ['ER']

    with pytest.raises(RecordNotFoundError):
        registered.get('EQ-0002', er_nurse)


def test_unrestricted_viewers_see_everything(registered):
    for viewer in (None, StubViewer(role='Admin', department='ER'), StubViewer(department=None)):
        assert len(registered.list(viewer)) == 3
    assert sorted(registered.departments()) == ['ER', 'ICU']


def test_visible_records_follow_asset_department(registered):
    class Row:
        def __init__(self, asset_id):
            self.asset_id = asset_id

    rows = [Row('EQ-0001'), Row('EQ-0002'), Row('EQ-9999')]
    visible = visibility.visible_records(StubViewer(department='ICU'), rows, registered.all())
    assert [r.asset_id for r in visible] == ['EQ-0002']
    assert len(visibility.visible_records(None, rows, registered.all())) == 3


def test_restricted_department():
    assert visibility.restricted_department(None) is None
    assert visibility.restricted_department(StubViewer(role='Admin', department='ER')) is None
    assert visibility.restricted_department(StubViewer(department='')) is None
    assert visibility.restricted_department(StubViewer(department='OPD')) == 'OPD'
