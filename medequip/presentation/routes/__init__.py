"""
Routes package for the equipment management dashboard
One blueprint per sidebar section
"""

from flask import Blueprint
from medequip.utils.logger import get_logger

logger = get_logger("medequip.routes")

# Create main blueprint
main = Blueprint('main', __name__)

# Import route modules
from . import dashboard, assets, checks, maintenance, loans, compliance, settings


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    # main is registered in medequip/__init__.py
    app.register_blueprint(assets.bp, url_prefix='/assets')
    app.register_blueprint(checks.bp, url_prefix='/checks')
    app.register_blueprint(maintenance.bp, url_prefix='/maintenance')
    app.register_blueprint(loans.bp, url_prefix='/loans')
    app.register_blueprint(compliance.bp, url_prefix='/compliance')
    app.register_blueprint(settings.bp, url_prefix='/settings')

    logger.info("All route blueprints registered successfully")
