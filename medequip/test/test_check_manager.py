"""
Tests for daily checks: pass/fail evaluation, note validation, alerts and the daily summary
"""
import itertools
import re
from datetime import date

import pytest

from medequip.buisness.checks.check_manager import CheckManager, evaluate
from medequip.data.core.asset import Asset
from medequip.data.core.check_record import CHECKLIST_ITEMS, ChecklistDetails
from medequip.data.core.statuses import CheckStatus
from medequip.data.storage.base import Collection
from medequip.errors import ValidationError
from medequip.test.conftest import RecordingNotifier, StubViewer

TODAY = date(2024, 6, 3)
ITEM_KEYS = [key for key, _ in CHECKLIST_ITEMS]


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def checks(local_store, asset_manager, notifier):
    asset_manager.create(Asset(id='EQ-0001', name='Vital Sign Monitor', serial_number='VSM-1', department='ER'))
    asset_manager.create(Asset(id='EQ-0002', name='Defibrillator', serial_number='DEF-1', department='เวชกรรมฟื้นฟู'))
    return CheckManager(local_store, asset_manager, notifier, summary_departments=('เวชกรรมฟื้นฟู',))


def _details(**failed_notes):
    """Items named in failed_notes are abnormal, with the given note"""
    values = {}
    for key in ITEM_KEYS:
        values[key] = key not in failed_notes
        values[f'{key}_note'] = failed_notes.get(key, '')
    return ChecklistDetails(**values)


@pytest.mark.parametrize('outcomes', list(itertools.product([True, False], repeat=4)))
def test_evaluate_every_combination(outcomes):
    details = ChecklistDetails(**dict(zip(ITEM_KEYS, outcomes)))
    expected = CheckStatus.PASS if all(outcomes) else CheckStatus.FAIL
    assert evaluate(details) == expected


def test_passing_check_is_stored_without_alert(checks, local_store, notifier):
    check = checks.submit('EQ-0001', 'Nurse Joy', _details(), notes='ignored on pass', check_date=TODAY)

    assert check.status == CheckStatus.PASS
    assert re.fullmatch(r'CHK-\d{4}', check.id)
    assert check.notes is None
    assert check.date == '2024-06-03'
    assert local_store.list(Collection.CHECKS)[0]['id'] == check.id
    assert notifier.messages == []


def test_failed_check_sends_alert(checks, notifier):
    check = checks.submit('EQ-0001', 'Nurse Joy', _details(screen='จอดับ'), notes='แจ้งช่างแล้ว', check_date=TODAY)

    assert check.status == CheckStatus.FAIL
    assert check.notes == 'แจ้งช่างแล้ว'
    assert len(notifier.messages) == 1
    message = notifier.messages[0]
    assert 'Vital Sign Monitor' in message
    assert 'จอดับ' in message
    assert 'หน้าจอ/ไฟสถานะ' in message


def test_failed_item_needs_a_note(checks, local_store, notifier):
    with pytest.raises(ValidationError) as excinfo:
        checks.submit('EQ-0001', 'Nurse Joy', _details(cleanliness='  '), check_date=TODAY)

    assert 'ความสะอาด' in str(excinfo.value)
    assert local_store.list(Collection.CHECKS) == []
    assert notifier.messages == []


@pytest.mark.parametrize('asset_id,checker', [('', 'Joy'), ('EQ-0001', ''), ('EQ-0001', '   ')])
def test_asset_and_checker_required(checks, asset_id, checker):
    with pytest.raises(ValidationError):
        checks.submit(asset_id, checker, _details())


def test_check_of_hidden_asset_rejected(checks):
    with pytest.raises(ValidationError):
        checks.submit('EQ-0002', 'Joy', _details(), viewer=StubViewer(department='ER'))
    with pytest.raises(ValidationError):
        checks.submit('EQ-9999', 'Joy', _details())


def test_list_filtered_by_department(checks):
    checks.submit('EQ-0001', 'Joy', _details())
    checks.submit('EQ-0002', 'Ann', _details())

    assert len(checks.list()) == 2
    assert [c.asset_id for c in checks.list(StubViewer(department='ER'))] == ['EQ-0001']


def test_summary_permission(checks):
    assert checks.can_send_summary(StubViewer(role='Admin'))
    assert checks.can_send_summary(StubViewer(department='เวชกรรมฟื้นฟู'))
    assert not checks.can_send_summary(StubViewer(department='ER'))
    assert not checks.can_send_summary(None)


def test_daily_summary_counts_only_that_day(checks):
    checks.submit('EQ-0001', 'Joy', _details(), check_date=TODAY)
    checks.submit('EQ-0002', 'Joy', _details(power_cord='ปลั๊กหลวม'), check_date=TODAY)
    checks.submit('EQ-0001', 'Joy', _details(), check_date=date(2024, 6, 2))

    summary = checks.daily_summary(StubViewer(username='boss', role='Admin'), TODAY)
    assert summary.total == 2
    assert summary.fail_count == 1
    assert summary.failed_items == ['Defibrillator']
    assert summary.checker == 'boss'


def test_send_daily_summary(checks, notifier):
    viewer = StubViewer(username='rehab', department='เวชกรรมฟื้นฟู')
    checks.submit('EQ-0002', 'Joy', _details(), check_date=TODAY, viewer=viewer)

    summary = checks.send_daily_summary(viewer, TODAY)
    assert summary.total == 1
    assert summary.department == 'เวชกรรมฟื้นฟู'
    assert len(notifier.messages) == 1
    assert 'อุปกรณ์สมบูรณ์ทุกรายการ' in notifier.messages[0]


def test_send_daily_summary_names_entered_checker(checks, notifier):
    viewer = StubViewer(username='rehab', department='เวชกรรมฟื้นฟู')
    checks.submit('EQ-0002', 'Joy', _details(), check_date=TODAY, viewer=viewer)

    summary = checks.send_daily_summary(viewer, TODAY, checker_name='  Nurse Joy ')
    assert summary.checker == 'Nurse Joy'
    assert 'Nurse Joy' in notifier.messages[0]

    assert checks.daily_summary(viewer, TODAY, checker_name='   ').checker == 'rehab'


def test_send_daily_summary_rejections(checks, notifier):
    with pytest.raises(ValidationError):
        checks.send_daily_summary(StubViewer(department='ER'), TODAY)
    with pytest.raises(ValidationError):
        checks.send_daily_summary(StubViewer(role='Admin'), TODAY)
    assert notifier.messages == []
