from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os
from medequip.utils.logger import get_logger

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
csrf = CSRFProtect()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per day", "50 per hour"],
    storage_uri="memory://"  # Use Redis in production for distributed systems
)


def _env_flag(name, default='False'):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(test_config=None):
    """
    Application factory.

    Args:
        test_config: Config overrides applied after the environment is read
    """
    from pathlib import Path

    package_dir = Path(__file__).parent
    app = Flask(__name__,
                template_folder=str(package_dir / 'presentation' / 'templates'),
                static_folder=str(package_dir / 'presentation' / 'static'))

    # Get singleton logger
    logger = get_logger("medequip")
    logger.info("Initializing Flask application")

    # Configuration
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')

    db_env = os.environ.get('DATABASE_URL')
    if db_env:
        app.config['SQLALCHEMY_DATABASE_URI'] = db_env
    else:
        instance_dir = package_dir.parent / 'instance'
        instance_dir.mkdir(parents=True, exist_ok=True)
        app.config['SQLALCHEMY_DATABASE_URI'] = f"sqlite:///{str((instance_dir / 'medequip.db').resolve())}"
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    app.config['ADMIN_PASSWORD'] = os.environ.get('ADMIN_PASSWORD', 'admin1234')
    app.config['REMOTE_TIMEOUT_SECONDS'] = float(os.environ.get('REMOTE_TIMEOUT_SECONDS', '15'))
    app.config['TELEGRAM_TIMEOUT_SECONDS'] = float(os.environ.get('TELEGRAM_TIMEOUT_SECONDS', '10'))
    app.config['DAILY_SUMMARY_DEPARTMENTS'] = tuple(
        d.strip() for d in os.environ.get('DAILY_SUMMARY_DEPARTMENTS', 'เวชกรรมฟื้นฟู').split(',') if d.strip()
    )
    app.config['SEED_SAMPLE_DATA'] = _env_flag('SEED_SAMPLE_DATA', 'True')

    # Uploaded attachments are stored inline, keep them small
    app.config['MAX_CONTENT_LENGTH'] = int(os.environ.get('MAX_CONTENT_LENGTH', str(5 * 1024 * 1024)))

    # HTTPS/TLS Configuration
    app.config['ENABLE_HTTPS'] = _env_flag('ENABLE_HTTPS')
    app.config['FORCE_HTTPS_REDIRECT'] = _env_flag('FORCE_HTTPS_REDIRECT')

    # Session cookie security configuration
    app.config['SESSION_COOKIE_SECURE'] = _env_flag('SESSION_COOKIE_SECURE')
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
    app.config['PERMANENT_SESSION_LIFETIME'] = int(os.environ.get('PERMANENT_SESSION_LIFETIME', '3600'))

    if test_config:
        app.config.update(test_config)

    # SECURITY: Require SECRET_KEY - no fallback
    if not app.config['SECRET_KEY']:
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")

    if app.config['ENABLE_HTTPS']:
        logger.info("HTTPS enforcement enabled")
        if app.config['FORCE_HTTPS_REDIRECT']:
            logger.info("Automatic HTTP to HTTPS redirect enabled")
    else:
        logger.warning("⚠️  HTTPS enforcement DISABLED - Acceptable for development only!")

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'กรุณาเข้าสู่ระบบก่อนใช้งาน'
    login_manager.login_message_category = 'info'

    logger.debug("Extensions initialized")

    # Import models to ensure they're registered with SQLAlchemy
    from medequip.data.storage.stored_collection import StoredCollection

    with app.app_context():
        db.create_all()
    logger.debug("Models imported and tables ensured")

    from medequip.buisness.core.service_registry import get_services
    from medequip.errors import StorageUnavailableError

    @login_manager.user_loader
    def load_user(username):
        return get_services().users.get(username)

    # Register blueprints
    from medequip.auth import auth
    from medequip.presentation.routes import main
    from medequip.presentation.routes import init_app as init_routes

    app.register_blueprint(auth)
    app.register_blueprint(main)
    init_routes(app)

    @app.context_processor
    def inject_settings():
        services = get_services()
        return {
            'app_settings': services.settings,
            'storage_mode': services.storage_mode,
        }

    @app.teardown_request
    def drop_services(exc=None):
        # Settings may change between requests that share one app context
        from flask import g
        g.pop('services', None)

    @app.errorhandler(StorageUnavailableError)
    def storage_unavailable(error):
        from flask import render_template
        logger.error(f"Storage unavailable: {error}")
        return render_template('errors/storage_unavailable.html', error=error), 503

    # Add HTTPS redirect before request processing
    @app.before_request
    def enforce_https():
        """Redirect HTTP requests to HTTPS if HTTPS enforcement is enabled"""
        if app.config.get('ENABLE_HTTPS') and app.config.get('FORCE_HTTPS_REDIRECT'):
            from flask import request, redirect

            if not request.is_secure and not request.headers.get('X-Forwarded-Proto') == 'https':
                url = request.url.replace('http://', 'https://', 1)
                return redirect(url, code=301)

    # Add security headers to all responses
    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-XSS-Protection'] = '1; mode=block'
        # Uploaded logos, backgrounds and attachments are data URIs
        response.headers['Content-Security-Policy'] = (
            "default-src 'self'; "
            "script-src 'self' 'unsafe-inline'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data: https:; "
            "font-src 'self' data:;"
        )
        if app.config.get('ENABLE_HTTPS'):
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response

    logger.info("Flask application initialization complete")

    return app
