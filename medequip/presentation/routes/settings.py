"""
Settings routes (administrators only)
Hospital branding, Telegram credentials, remote storage endpoint, departments,
and backup / restore of the record collections
"""

from datetime import date
from functools import wraps
from urllib.parse import quote

from flask import Blueprint, Response, render_template, redirect, url_for, flash, request, abort
from flask_login import login_required, current_user
from medequip.buisness.core.service_registry import get_services
from medequip.data.core.app_settings import is_valid_endpoint
from medequip.errors import StorageError
from medequip.utils.data_uri import file_to_data_uri
from medequip.utils.logger import get_logger
from medequip.utils.logging_sanitizer import sanitize_form_data

bp = Blueprint('settings', __name__)
logger = get_logger("medequip.routes.settings")


def admin_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated or not current_user.is_admin:
            logger.warning(f"Non-admin access to {request.endpoint} by {getattr(current_user, 'username', 'anonymous')}")
            abort(403)
        return view(*args, **kwargs)
    return wrapped


def _image_field(prefix, current):
    """Uploaded file wins, then a typed URL; otherwise keep the current image unless cleared"""
    uploaded = file_to_data_uri(request.files.get(f'{prefix}_file'))
    if uploaded:
        return uploaded
    typed = request.form.get(f'{prefix}_url', '').strip()
    if typed:
        return typed
    return '' if request.form.get(f'clear_{prefix}') else current


@bp.route('', methods=['GET', 'POST'])
@login_required
@admin_required
def index():
    services = get_services()
    settings = services.settings

    if request.method == 'POST':
        logger.debug(f"Settings form submitted: {sanitize_form_data(request.form)}")
        endpoint = request.form.get('remote_endpoint_url', '').strip()
        if endpoint and not is_valid_endpoint(endpoint):
            flash('URL ของ Google Apps Script ต้องขึ้นต้นด้วย https://', 'error')
            return render_template('settings/index.html', settings=settings, mode=services.storage_mode)

        settings.hospital_name = request.form.get('hospital_name', '').strip() or settings.hospital_name
        settings.telegram_bot_token = request.form.get('telegram_bot_token', '').strip()
        settings.telegram_chat_id = request.form.get('telegram_chat_id', '').strip()
        settings.remote_endpoint_url = endpoint

        settings.logo_url = _image_field('logo', settings.logo_url)
        settings.background_url = _image_field('background', settings.background_url)

        services.settings_store.save(settings)
        logger.info(f"Settings updated by {current_user.username}; storage mode "
                    f"{'remote' if settings.uses_remote_storage else 'local'}")
        flash('บันทึกการตั้งค่าเรียบร้อยแล้ว', 'success')
        return redirect(url_for('settings.index'))

    return render_template('settings/index.html', settings=settings, mode=services.storage_mode)


@bp.route('/departments', methods=['POST'])
@login_required
@admin_required
def add_department():
    name = request.form.get('name', '').strip()
    if not name:
        flash('กรุณาระบุชื่อแผนก', 'error')
    elif get_services().settings_store.add_department(name):
        flash(f'เพิ่มแผนก {name} แล้ว', 'success')
    else:
        flash(f'มีแผนก {name} อยู่แล้ว', 'info')
    return redirect(url_for('settings.index'))


@bp.route('/departments/remove', methods=['POST'])
@login_required
@admin_required
def remove_department():
    name = request.form.get('name', '')
    if get_services().settings_store.remove_department(name):
        flash(f'ลบแผนก {name} แล้ว', 'success')
    else:
        flash('ไม่พบแผนกที่ต้องการลบ', 'error')
    return redirect(url_for('settings.index'))


@bp.route('/backup')
@login_required
@admin_required
def backup():
    """Download every collection as one JSON document"""
    content = get_services().backup.export_all()
    filename = f"medequip_backup_{date.today().isoformat()}.json"
    logger.info(f"Backup downloaded by {current_user.username}")
    return Response(
        content,
        content_type='application/json; charset=utf-8',
        headers={'Content-Disposition': f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@bp.route('/restore', methods=['POST'])
@login_required
@admin_required
def restore():
    """Replace the local collections with a backup file"""
    upload = request.files.get('backup_file')
    if upload is None or not upload.filename:
        flash('กรุณาเลือกไฟล์สำรองข้อมูล', 'error')
        return redirect(url_for('settings.index'))

    try:
        text = upload.read().decode('utf-8-sig')
        restored = get_services().backup.import_data(text)
        flash('นำเข้าข้อมูลสำเร็จ: ' + ', '.join(f'{key} {count}' for key, count in restored.items()), 'success')
    except UnicodeDecodeError:
        logger.warning(f"Restore file {upload.filename} is not UTF-8 text")
        flash('ไฟล์ไม่ถูกต้อง (Invalid JSON)', 'error')
    except ValueError as e:
        logger.warning(f"Restore rejected: {e}")
        flash(str(e), 'error')
    except StorageError as e:
        logger.error(f"Restore failed: {e}")
        flash('นำเข้าข้อมูลไม่สำเร็จ', 'error')
    return redirect(url_for('settings.index'))
