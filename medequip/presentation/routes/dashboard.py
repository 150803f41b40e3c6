"""
Dashboard route
Landing page with the asset status overview
"""

from flask import render_template
from flask_login import login_required, current_user
from medequip.buisness.core.service_registry import get_services
from medequip.services.core.dashboard_service import DashboardService
from medequip.utils.logger import get_logger
from . import main

logger = get_logger("medequip.routes.dashboard")


@main.route('/')
@login_required
def index():
    """Status overview of the assets visible to the user"""
    services = get_services()
    assets = services.assets.list(current_user)
    stats = DashboardService.get_stats(assets)
    activity = DashboardService.get_recent_activity(
        services.checks.list(current_user),
        services.maintenance.list(current_user),
    )

    logger.debug(f"Dashboard for {current_user.username}: {stats['total']} assets, {stats['maintenance']} need maintenance")
    return render_template('dashboard.html', stats=stats, **activity)
