"""
Daily check routes
Four-item checklist submission, recent checks and the daily summary
"""

from datetime import date

from flask import Blueprint, render_template, redirect, url_for, flash, request
from flask_login import login_required, current_user
from medequip.buisness.core.service_registry import get_services
from medequip.data.core.check_record import CHECKLIST_ITEMS, ChecklistDetails
from medequip.errors import StorageError
from medequip.utils.logger import get_logger

bp = Blueprint('checks', __name__)
logger = get_logger("medequip.routes.checks")


def _checklist_from_form(form) -> ChecklistDetails:
    """Each item is a pass/fail radio; unanswered items count as normal"""
    values = {}
    for key, _ in CHECKLIST_ITEMS:
        values[key] = form.get(key, 'pass') != 'fail'
        values[f'{key}_note'] = form.get(f'{key}_note', '').strip()
    return ChecklistDetails(**values)


@bp.route('')
@login_required
def list():
    """Checklist form and the latest checks of the user's assets"""
    services = get_services()
    checks = services.checks.list(current_user)
    today = date.today()

    return render_template('checks/index.html',
                           assets=services.assets.list(current_user),
                           checks=checks[:50],
                           checklist_items=CHECKLIST_ITEMS,
                           summary=services.checks.daily_summary(current_user, today),
                           can_send_summary=services.checks.can_send_summary(current_user),
                           today=today.isoformat())


@bp.route('/submit', methods=['POST'])
@login_required
def submit():
    services = get_services()
    details = _checklist_from_form(request.form)

    try:
        check = services.checks.submit(
            asset_id=request.form.get('asset_id', ''),
            checker_name=request.form.get('checker_name', '') or current_user.username,
            details=details,
            notes=request.form.get('notes'),
            viewer=current_user,
        )
        if check.passed:
            flash(f'บันทึกผลการตรวจ {check.asset_name}: ผ่าน', 'success')
        else:
            flash(f'บันทึกผลการตรวจ {check.asset_name}: ไม่ผ่าน (แจ้งเตือนแล้ว)', 'warning')
    except ValueError as e:
        logger.warning(f"Daily check rejected for {current_user.username}: {e}")
        flash(str(e), 'error')
    except StorageError as e:
        logger.error(f"Daily check could not be saved: {e}")
        flash('บันทึกข้อมูลไม่สำเร็จ กรุณาลองใหม่อีกครั้ง', 'error')

    return redirect(url_for('checks.list'))


@bp.route('/summary', methods=['POST'])
@login_required
def summary():
    """Send today's summary to the notification chat"""
    services = get_services()
    try:
        result = services.checks.send_daily_summary(current_user,
                                                    checker_name=request.form.get('checker_name'))
        flash(f'ส่งสรุปผลการตรวจแล้ว ({result.total} เครื่อง, พบปัญหา {result.fail_count})', 'success')
    except ValueError as e:
        logger.warning(f"Daily summary rejected for {current_user.username}: {e}")
        flash(str(e), 'error')

    return redirect(url_for('checks.list'))
