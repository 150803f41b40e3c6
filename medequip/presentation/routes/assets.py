"""
Asset register routes
List, search, create, edit, delete, CSV export and the physical count (audit) mode
"""

from datetime import date
from urllib.parse import quote

from flask import Blueprint, Response, render_template, redirect, url_for, flash, request, abort
from flask_login import login_required, current_user
from medequip.buisness.core.service_registry import get_services
from medequip.data.core import fields
from medequip.data.core.asset import Asset
from medequip.data.core.statuses import ASSET_STATUS_LABELS, AssetStatus, AuditStatus
from medequip.errors import RecordNotFoundError, StorageError
from medequip.services.assets.asset_service import AssetService, ALL_DEPARTMENTS
from medequip.services.exports import csv_export
from medequip.utils.data_uri import file_to_data_uri
from medequip.utils.logger import get_logger
from medequip.utils.logging_sanitizer import sanitize_form_data

bp = Blueprint('assets', __name__)
logger = get_logger("medequip.routes.assets")


def _asset_from_form(form, files, existing=None):
    image = file_to_data_uri(files.get('image_file')) or form.get('image', '').strip()
    if not image and existing is not None:
        image = existing.image
    return Asset(
        id=form.get('id', '').strip() if existing is None else existing.id,
        name=form.get('name', '').strip(),
        serial_number=form.get('serial_number', '').strip(),
        brand=form.get('brand', '').strip(),
        model=form.get('model', '').strip(),
        department=form.get('department', '').strip(),
        purchase_date=fields.date_text(form.get('purchase_date')),
        price=fields.number(form.get('price')),
        status=AssetStatus.coerce(form.get('status'), default=AssetStatus.ACTIVE),
        next_pm_date=fields.date_text(form.get('next_pm_date')),
        manual_url=form.get('manual_url', '').strip(),
        google_drive_url=form.get('google_drive_url', '').strip(),
        image=image,
    )


def _form_context(services, asset=None):
    return {
        'asset': asset,
        'departments': services.settings.departments,
        'statuses': [(status.value, ASSET_STATUS_LABELS[status]) for status in AssetStatus],
    }


@bp.route('')
@login_required
def list():
    """Asset register with search, department filter and optional count mode"""
    services = get_services()
    filters = AssetService.get_list_filters(request)
    audit_mode = request.args.get('audit') == '1'

    visible = services.assets.list(current_user)
    assets = AssetService.filter_assets(visible, **filters)

    audit = None
    if audit_mode:
        audit = {
            'statuses': AssetService.audit_statuses(assets, services.audit.load()),
            'summary': services.audit.summarize(assets),
        }

    return render_template('assets/list.html',
                           assets=assets,
                           filters=filters,
                           departments=services.assets.departments(current_user),
                           status_labels=ASSET_STATUS_LABELS,
                           audit_mode=audit_mode,
                           audit=audit,
                           AuditStatus=AuditStatus,
                           all_departments=ALL_DEPARTMENTS)


@bp.route('/create', methods=['GET', 'POST'])
@login_required
def create():
    """Register new equipment"""
    services = get_services()

    if request.method == 'POST':
        asset = _asset_from_form(request.form, request.files)
        try:
            asset = services.assets.create(asset)
            flash(f'เพิ่มครุภัณฑ์ {asset.name} ({asset.id}) เรียบร้อยแล้ว', 'success')
            return redirect(url_for('assets.list'))
        except ValueError as e:
            logger.warning(f"Asset create rejected: {e} form={sanitize_form_data(request.form)}")
            flash(str(e), 'error')
        except StorageError as e:
            logger.error(f"Asset create failed: {e}")
            flash('บันทึกข้อมูลไม่สำเร็จ กรุณาลองใหม่อีกครั้ง', 'error')
        return render_template('assets/form.html', **_form_context(services, asset))

    return render_template('assets/form.html', **_form_context(services))


@bp.route('/<asset_id>/edit', methods=['GET', 'POST'])
@login_required
def edit(asset_id):
    """Edit an asset, including a manual status override"""
    services = get_services()
    try:
        existing = services.assets.get(asset_id, current_user)
    except RecordNotFoundError:
        abort(404)

    if request.method == 'POST':
        asset = _asset_from_form(request.form, request.files, existing=existing)
        try:
            services.assets.update(asset)
            flash(f'แก้ไขข้อมูล {asset.name} เรียบร้อยแล้ว', 'success')
            return redirect(url_for('assets.list'))
        except ValueError as e:
            logger.warning(f"Asset update of {asset_id} rejected: {e}")
            flash(str(e), 'error')
        except StorageError as e:
            logger.error(f"Asset update of {asset_id} failed: {e}")
            flash('บันทึกข้อมูลไม่สำเร็จ กรุณาลองใหม่อีกครั้ง', 'error')
        return render_template('assets/form.html', **_form_context(services, asset))

    return render_template('assets/form.html', **_form_context(services, existing))


@bp.route('/<asset_id>/delete', methods=['POST'])
@login_required
def delete(asset_id):
    services = get_services()
    try:
        asset = services.assets.get(asset_id, current_user)
    except RecordNotFoundError:
        abort(404)

    try:
        services.assets.delete(asset.id)
        logger.info(f"User {current_user.username} deleted asset {asset}")
        flash(f'ลบ {asset.name} เรียบร้อยแล้ว', 'success')
    except StorageError as e:
        logger.error(f"Asset delete of {asset_id} failed: {e}")
        flash('ลบข้อมูลไม่สำเร็จ กรุณาลองใหม่อีกครั้ง', 'error')
    return redirect(url_for('assets.list'))


@bp.route('/export')
@login_required
def export():
    """Download the filtered register (or the count report in audit mode) as CSV"""
    services = get_services()
    filters = AssetService.get_list_filters(request)
    assets = AssetService.filter_assets(services.assets.list(current_user), **filters)

    if request.args.get('audit') == '1':
        content = csv_export.audit_csv(assets, services.audit.load())
        department = filters['department'] if filters['department'] != ALL_DEPARTMENTS else 'all'
        filename = csv_export.export_filename(f'audit_report_{department}')
    else:
        content = csv_export.assets_csv(assets)
        filename = csv_export.export_filename('asset_register')

    logger.info(f"User {current_user.username} exported {len(assets)} assets to {filename}")
    return Response(
        content,
        content_type='text/csv; charset=utf-8',
        headers={'Content-Disposition': f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@bp.route('/audit/<asset_id>', methods=['POST'])
@login_required
def audit(asset_id):
    """Mark an asset found or missing; choosing the same mark again clears it"""
    services = get_services()
    try:
        status = AuditStatus.coerce(request.form.get('status'))
    except ValueError:
        abort(400)
    try:
        services.assets.get(asset_id, current_user)
    except RecordNotFoundError:
        abort(404)

    new_status = services.audit.toggle(asset_id, status)
    logger.debug(f"User {current_user.username} set audit status of {asset_id} to {new_status.value}")
    return redirect(url_for('assets.list', audit='1',
                            q=request.form.get('q', ''),
                            department=request.form.get('department', ALL_DEPARTMENTS)))


@bp.route('/audit/reset', methods=['POST'])
@login_required
def audit_reset():
    get_services().audit.reset()
    logger.info(f"User {current_user.username} reset the audit progress on {date.today().isoformat()}")
    flash('เริ่มการตรวจนับใหม่แล้ว', 'info')
    return redirect(url_for('assets.list', audit='1'))
