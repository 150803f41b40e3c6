"""
Loan routes
Borrow, return and loan history tabs
"""

from datetime import date

from flask import Blueprint, render_template, redirect, url_for, flash, request
from flask_login import login_required, current_user
from medequip.buisness.core.service_registry import get_services
from medequip.data.core import fields
from medequip.data.core.statuses import AssetStatus
from medequip.errors import RecordNotFoundError, StorageError
from medequip.utils.logger import get_logger

bp = Blueprint('loans', __name__)
logger = get_logger("medequip.routes.loans")

TABS = ('borrow', 'return', 'history')


@bp.route('')
@login_required
def list():
    services = get_services()
    tab = request.args.get('tab', 'borrow')
    if tab not in TABS:
        tab = 'borrow'

    loans = services.loans.list(current_user)
    available = [a for a in services.assets.list(current_user) if a.status == AssetStatus.ACTIVE]

    return render_template('loans/index.html',
                           tab=tab,
                           available_assets=available,
                           open_loans=[loan for loan in loans if loan.is_open],
                           loans=loans,
                           departments=services.settings.departments,
                           today=date.today())


@bp.route('/borrow', methods=['POST'])
@login_required
def borrow():
    services = get_services()
    try:
        loan = services.loans.create_loan(
            asset_id=request.form.get('asset_id', ''),
            borrower_name=request.form.get('borrower_name', ''),
            department=request.form.get('department', ''),
            due_date=fields.date_text(request.form.get('due_date')),
            loan_date=fields.parse_date(request.form.get('loan_date')),
            viewer=current_user,
        )
        flash(f'บันทึกการยืม {loan.asset_name} โดย {loan.borrower_name} เรียบร้อยแล้ว', 'success')
        return redirect(url_for('loans.list', tab='return'))
    except ValueError as e:
        logger.warning(f"Loan rejected for {current_user.username}: {e}")
        flash(str(e), 'error')
    except StorageError as e:
        logger.error(f"Loan could not be saved: {e}")
        flash('บันทึกข้อมูลไม่สำเร็จ กรุณาลองใหม่อีกครั้ง', 'error')
    return redirect(url_for('loans.list', tab='borrow'))


@bp.route('/<loan_id>/return', methods=['POST'])
@login_required
def return_loan(loan_id):
    services = get_services()
    try:
        loan = services.loans.return_loan(loan_id, fields.parse_date(request.form.get('return_date')),
                                          viewer=current_user)
        flash(f'รับคืน {loan.asset_name} เรียบร้อยแล้ว', 'success')
    except RecordNotFoundError:
        logger.warning(f"Return of unknown loan {loan_id} by {current_user.username}")
        flash('ไม่พบรายการยืมที่ต้องการคืน', 'error')
    except ValueError as e:
        logger.warning(f"Return of loan {loan_id} rejected: {e}")
        flash(str(e), 'error')
    except StorageError as e:
        logger.error(f"Return of loan {loan_id} could not be saved: {e}")
        flash('บันทึกข้อมูลไม่สำเร็จ กรุณาลองใหม่อีกครั้ง', 'error')
    return redirect(url_for('loans.list', tab='return'))
