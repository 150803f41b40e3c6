"""
Tests for lending and returning equipment
"""
from datetime import date

import pytest

from medequip.buisness.loans.loan_manager import LoanManager, UNSPECIFIED_DEPARTMENT
from medequip.data.core.asset import Asset
from medequip.data.core.statuses import AssetStatus, LoanStatus
from medequip.errors import RecordNotFoundError, ValidationError
from medequip.test.conftest import StubViewer


@pytest.fixture
def loans(local_store, asset_manager):
    asset_manager.create(Asset(id='EQ-0001', name='Infusion Pump', serial_number='IP-1', department='Pediatrics'))
    asset_manager.create(Asset(id='EQ-0002', name='Ventilator', serial_number='VT-1',
                               department='ICU', status=AssetStatus.REPAIR))
    return LoanManager(local_store, asset_manager)


def test_borrow_marks_asset_loaned(loans, asset_manager):
    loan = loans.create_loan('EQ-0001', 'ICU Ward', department='ICU', due_date='2024-06-10',
                             loan_date=date(2024, 6, 1))

    assert loan.status == LoanStatus.ACTIVE
    assert loan.id.startswith('LN-')
    assert loan.loan_date == '2024-06-01'
    assert loan.due_date == '2024-06-10'
    assert asset_manager.get('EQ-0001').status == AssetStatus.LOANED
    assert [l.id for l in loans.open_loans()] == [loan.id]


def test_borrow_defaults_department(loans):
    assert loans.create_loan('EQ-0001', 'Ward 5').department == UNSPECIFIED_DEPARTMENT


def test_only_active_assets_can_be_lent(loans, asset_manager):
    with pytest.raises(ValidationError):
        loans.create_loan('EQ-0002', 'ER')

    loans.create_loan('EQ-0001', 'ER')
    with pytest.raises(ValidationError):
        loans.create_loan('EQ-0001', 'OPD')
    assert len(loans.all()) == 1


def test_borrower_required(loans):
    with pytest.raises(ValidationError):
        loans.create_loan('EQ-0001', '  ')


def test_hidden_asset_cannot_be_lent(loans):
    with pytest.raises(ValidationError):
        loans.create_loan('EQ-0001', 'ER', viewer=StubViewer(department='ICU'))


def test_return_restores_active(loans, asset_manager):
    loan = loans.create_loan('EQ-0001', 'ICU Ward')
    returned = loans.return_loan(loan.id, date(2024, 6, 5))

    assert returned.status == LoanStatus.RETURNED
    assert returned.return_date == '2024-06-05'
    assert loans.get(loan.id).status == LoanStatus.RETURNED
    assert asset_manager.get('EQ-0001').status == AssetStatus.ACTIVE
    assert loans.open_loans() == []


def test_return_keeps_status_changed_meanwhile(loans, asset_manager):
    """An asset sent for repair while on loan stays under repair"""
    loan = loans.create_loan('EQ-0001', 'ICU Ward')
    asset_manager.set_status(asset_manager.get('EQ-0001'), AssetStatus.REPAIR)

    loans.return_loan(loan.id)

    assert loans.get(loan.id).status == LoanStatus.RETURNED
    assert asset_manager.get('EQ-0001').status == AssetStatus.REPAIR


def test_return_after_asset_deleted(loans, asset_manager):
    loan = loans.create_loan('EQ-0001', 'ICU Ward')
    asset_manager.delete('EQ-0001')

    assert loans.return_loan(loan.id).status == LoanStatus.RETURNED


def test_return_twice_rejected(loans):
    loan = loans.create_loan('EQ-0001', 'ICU Ward')
    loans.return_loan(loan.id)
    with pytest.raises(ValidationError):
        loans.return_loan(loan.id)


def test_return_unknown_loan(loans):
    with pytest.raises(RecordNotFoundError):
        loans.return_loan('LN-404')


def test_return_limited_to_viewer_department(loans, asset_manager):
    loan = loans.create_loan('EQ-0001', 'ICU Ward', department='ICU')

    with pytest.raises(RecordNotFoundError):
        loans.return_loan(loan.id, viewer=StubViewer(department='ER'))
    assert loans.get(loan.id).status == LoanStatus.ACTIVE
    assert asset_manager.get('EQ-0001').status == AssetStatus.LOANED

    returned = loans.return_loan(loan.id, viewer=StubViewer(department='Pediatrics'))
    assert returned.status == LoanStatus.RETURNED
    assert asset_manager.get('EQ-0001').status == AssetStatus.ACTIVE
