"""
Maintenance routes
Repair requests, PM reports, upcoming-PM alerts and the maintenance CSV report
"""

from urllib.parse import quote

from flask import Blueprint, Response, render_template, redirect, url_for, flash, request, abort
from flask_login import login_required, current_user
from medequip.buisness.core.service_registry import get_services
from medequip.data.core import fields
from medequip.data.core.statuses import MaintenanceType
from medequip.errors import StorageError
from medequip.services.exports import csv_export
from medequip.utils.data_uri import file_to_data_uri
from medequip.utils.logger import get_logger
from medequip.utils.logging_sanitizer import sanitize_form_data

bp = Blueprint('maintenance', __name__)
logger = get_logger("medequip.routes.maintenance")

FORM_MODES = ('repair', 'pm')


@bp.route('')
@login_required
def list():
    """Maintenance history, optionally limited to one type"""
    services = get_services()
    records = services.maintenance.list(current_user)

    type_filter = request.args.get('type', '')
    if type_filter in [t.value for t in MaintenanceType]:
        records = [r for r in records if r.type.value == type_filter]

    return render_template('maintenance/list.html', records=records, type_filter=type_filter)


@bp.route('/new/<mode>', methods=['GET', 'POST'])
@login_required
def new(mode):
    """One form, two modes: repair request (CM) or PM report"""
    if mode not in FORM_MODES:
        abort(404)

    services = get_services()
    assets = services.assets.list(current_user)

    if request.method == 'POST':
        manager = services.maintenance
        create = manager.request_repair if mode == 'repair' else manager.record_pm
        try:
            record = create(
                asset_id=request.form.get('asset_id', ''),
                description=request.form.get('description', ''),
                technician=request.form.get('technician', ''),
                cost=fields.number(request.form.get('cost')),
                request_date=fields.parse_date(request.form.get('request_date')),
                attachment_url=file_to_data_uri(request.files.get('attachment')),
                viewer=current_user,
            )
            if mode == 'repair':
                flash(f'แจ้งซ่อม {record.asset_name} เรียบร้อยแล้ว ({record.id})', 'success')
            else:
                flash(f'บันทึกผล PM {record.asset_name} เรียบร้อยแล้ว ({record.id})', 'success')
            return redirect(url_for('maintenance.list'))
        except ValueError as e:
            logger.warning(f"Maintenance {mode} rejected: {e} form={sanitize_form_data(request.form)}")
            flash(str(e), 'error')
        except StorageError as e:
            logger.error(f"Maintenance {mode} could not be saved: {e}")
            flash('บันทึกข้อมูลไม่สำเร็จ กรุณาลองใหม่อีกครั้ง', 'error')
        return render_template('maintenance/form.html', mode=mode, assets=assets, form=request.form)

    return render_template('maintenance/form.html', mode=mode, assets=assets,
                           form={'asset_id': request.args.get('asset_id', '')})


@bp.route('/check-alerts', methods=['POST'])
@login_required
def check_alerts():
    """Scan for PMs due within seven days and send one alert per asset"""
    hits = get_services().maintenance.check_upcoming_pms()
    if hits:
        flash(f'ส่งแจ้งเตือน PM ล่วงหน้า {len(hits)} รายการ', 'success')
    else:
        flash('ไม่มีครุภัณฑ์ที่ถึงรอบ PM ใน 7 วันข้างหน้า', 'info')
    logger.info(f"User {current_user.username} ran the upcoming PM check: {len(hits)} hit(s)")
    return redirect(url_for('maintenance.list'))


@bp.route('/export')
@login_required
def export():
    records = get_services().maintenance.list(current_user)
    filename = csv_export.export_filename('maintenance_report')
    logger.info(f"User {current_user.username} exported {len(records)} maintenance records")
    return Response(
        csv_export.maintenance_csv(records),
        content_type='text/csv; charset=utf-8',
        headers={'Content-Disposition': f"attachment; filename*=UTF-8''{quote(filename)}"},
    )
