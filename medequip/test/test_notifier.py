"""
Tests for Telegram delivery and the message templates
"""
import requests

from medequip.buisness.notifications import messages
from medequip.buisness.notifications.messages import DailySummary
from medequip.buisness.notifications.notifier import TelegramNotifier
from medequip.data.core.asset import Asset
from medequip.data.core.check_record import CheckRecord, ChecklistDetails
from medequip.data.core.maintenance_record import MaintenanceRecord
from medequip.data.core.statuses import CheckStatus, MaintenanceType


class FakeResponse:

    def __init__(self, status_code=200):
        self.status_code = status_code
        self.ok = status_code < 400


def test_sends_html_message(monkeypatch):
    calls = []

    def fake_post(url, json=None, timeout=None):
        calls.append((url, json, timeout))
        return FakeResponse()

    monkeypatch.setattr(requests, 'post', fake_post)
    TelegramNotifier('123:abc', '-1001', timeout=4, background=False).notify('<b>hello</b>')

    assert calls == [(
        'https://api.telegram.org/bot123:abc/sendMessage',
        {'chat_id': '-1001', 'text': '<b>hello</b>', 'parse_mode': 'HTML'},
        4,
    )]


def test_unconfigured_notifier_sends_nothing(monkeypatch):
    calls = []
    monkeypatch.setattr(requests, 'post', lambda *args, **kwargs: calls.append(args))

    TelegramNotifier('', '-1001', background=False).notify('x')
    TelegramNotifier('123:abc', '', background=False).notify('x')
    assert calls == []


def test_delivery_failures_never_raise(monkeypatch):
    def failing_post(*args, **kwargs):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(requests, 'post', failing_post)
    TelegramNotifier('123:abc', '-1001', background=False).notify('x')

    monkeypatch.setattr(requests, 'post', lambda *args, **kwargs: FakeResponse(401))
    TelegramNotifier('123:abc', '-1001', background=False).notify('x')


def test_background_delivery(monkeypatch):
    import threading
    delivered = threading.Event()

    def fake_post(url, json=None, timeout=None):
        delivered.set()
        return FakeResponse()

    monkeypatch.setattr(requests, 'post', fake_post)
    TelegramNotifier('123:abc', '-1001').notify('x')
    assert delivered.wait(timeout=5)


def test_check_failed_message_escapes_html():
    check = CheckRecord(id='CHK-1', asset_id='EQ-1', asset_name='Monitor <ER>', date='2024-06-01',
                        checker_name='Joy & Ann', status=CheckStatus.FAIL,
                        checklist_details=ChecklistDetails(power_cord=False, power_cord_note='สายขาด'))
    text = messages.check_failed_message(check)
    assert 'Monitor &lt;ER&gt;' in text
    assert 'Joy &amp; Ann' in text
    assert '- สายไฟ/ปลั๊กไฟ: สายขาด' in text
    assert 'สรุปเพิ่มเติม:</b> -' in text


def test_repair_and_pm_messages():
    record = MaintenanceRecord(id='MT-1', asset_id='EQ-1', asset_name='X-Ray', type=MaintenanceType.CM,
                               request_date='2024-06-01', technician='Pending Assignment',
                               description='Arm stuck', attachment_url='data:image/png;base64,AA')
    assert 'มีไฟล์แนบ' in messages.repair_request_message(record)

    asset = Asset(id='EQ-1', name='X-Ray', serial_number='S', department='Radiology', next_pm_date='2024-06-04')
    text = messages.upcoming_pm_message(asset, 3)
    assert 'X-Ray (EQ-1)' in text
    assert '2024-06-04 (อีก 3 วัน)' in text


def test_daily_summary_message_lists_failures():
    summary = DailySummary(department='ICU', checker='joy', date='2024-06-01',
                           total=3, fail_count=2, failed_items=['Monitor', 'Pump'])
    text = messages.daily_summary_message(summary)
    assert '3 เครื่อง' in text
    assert '- Monitor\n- Pump' in text
