"""
Compliance routes
Quality indicators and the maintenance compliance report
"""

from urllib.parse import quote

from flask import Blueprint, Response, render_template
from flask_login import login_required, current_user
from medequip.buisness.core.service_registry import get_services
from medequip.services.core.compliance_service import ComplianceService
from medequip.services.exports import csv_export
from medequip.utils.logger import get_logger

bp = Blueprint('compliance', __name__)
logger = get_logger("medequip.routes.compliance")


@bp.route('')
@login_required
def index():
    services = get_services()
    report = ComplianceService.get_report(
        services.assets.list(current_user),
        services.checks.list(current_user),
        services.maintenance.list(current_user),
    )
    return render_template('compliance/index.html', report=report)


@bp.route('/export')
@login_required
def export():
    services = get_services()
    records = ComplianceService.sorted_records(services.maintenance.list(current_user))
    filename = csv_export.export_filename('compliance_report')
    logger.info(f"User {current_user.username} exported the compliance report ({len(records)} records)")
    return Response(
        csv_export.compliance_csv(records),
        content_type='text/csv; charset=utf-8',
        headers={'Content-Disposition': f"attachment; filename*=UTF-8''{quote(filename)}"},
    )
