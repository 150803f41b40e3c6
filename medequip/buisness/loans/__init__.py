from medequip.buisness.loans.loan_manager import LoanManager
