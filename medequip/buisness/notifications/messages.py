"""
Message templates for the Telegram notifications (HTML parse mode).
"""

from dataclasses import dataclass
from html import escape
from typing import List

from medequip.data.core.asset import Asset
from medequip.data.core.check_record import CheckRecord
from medequip.data.core.maintenance_record import MaintenanceRecord


@dataclass(frozen=True)
class DailySummary:
    department: str
    checker: str
    date: str
    total: int
    fail_count: int
    failed_items: List[str]


def check_failed_message(check: CheckRecord) -> str:
    issues = ''
    if check.checklist_details is not None:
        for _, label, note in check.checklist_details.failed_items():
            issues += f"- {escape(label)}: {escape(note or 'ผิดปกติ')}\n"

    return (
        "🚨 <b>แจ้งเตือนความผิดปกติ (Daily Check Fail)</b>\n\n"
        f"<b>อุปกรณ์:</b> {escape(check.asset_name)}\n"
        f"<b>ผู้ตรวจ:</b> {escape(check.checker_name)}\n"
        f"<b>วันที่:</b> {escape(check.date)}\n"
        "----------------------------\n"
        f"<b>จุดที่พบปัญหา:</b>\n{issues or '- ไม่ระบุ'}\n"
        f"<b>สรุปเพิ่มเติม:</b> {escape(check.notes or '-')}"
    )


def repair_request_message(record: MaintenanceRecord) -> str:
    return (
        "🛠 <b>แจ้งซ่อมใหม่ (New Maintenance Request)</b>\n\n"
        f"<b>อุปกรณ์:</b> {escape(record.asset_name)}\n"
        f"<b>ผู้แจ้ง:</b> {escape(record.technician)}\n"
        f"<b>อาการเสีย:</b> {escape(record.description)}\n"
        f"<b>เอกสารแนบ:</b> {'มีไฟล์แนบ' if record.has_attachment else '-'}\n"
        "<b>ความเร่งด่วน:</b> สูง"
    )


def upcoming_pm_message(asset: Asset, days_left: int) -> str:
    return (
        "📅 <b>แจ้งเตือน PM ล่วงหน้า (Upcoming PM)</b>\n\n"
        f"<b>อุปกรณ์:</b> {escape(asset.name)} ({escape(asset.id)})\n"
        f"<b>แผนก:</b> {escape(asset.department)}\n"
        f"<b>กำหนด PM:</b> {escape(asset.next_pm_date)} (อีก {days_left} วัน)\n"
        "กรุณาเตรียมแผนการบำรุงรักษา"
    )


def daily_summary_message(summary: DailySummary) -> str:
    if summary.failed_items:
        failed = "\n<b>รายชื่อเครื่องที่พบปัญหา:</b>\n- " + "\n- ".join(escape(name) for name in summary.failed_items)
    else:
        failed = "\n✨ อุปกรณ์สมบูรณ์ทุกรายการ"

    return (
        f"📊 <b>สรุปผลการตรวจประจำวัน ({escape(summary.department)})</b>\n\n"
        f"<b>วันที่:</b> {escape(summary.date)}\n"
        f"<b>ผู้ตรวจ:</b> {escape(summary.checker)}\n"
        "--------------------------------\n"
        f"✅ <b>ตรวจสอบแล้ว:</b> {summary.total} เครื่อง\n"
        f"❌ <b>พบปัญหา (ไม่ผ่าน):</b> {summary.fail_count} เครื่อง\n"
        f"{failed}"
    )
