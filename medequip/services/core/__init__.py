"""
Core Services
Dashboard and compliance statistics
"""

from .dashboard_service import DashboardService
from .compliance_service import ComplianceService

__all__ = [
    'DashboardService',
    'ComplianceService',
]
