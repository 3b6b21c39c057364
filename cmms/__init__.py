from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os
from cmms.logger import get_logger

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
csrf = CSRFProtect()
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://"  # Use Redis in production for distributed systems
)


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(config_overrides=None):
    """
    Build the CMMS Flask application.

    Args:
        config_overrides (dict, optional): Values applied on top of the
            environment-derived configuration, before it is validated.
            Tests use this to point at an in-memory database.

    Returns:
        Flask: Configured application
    """
    from pathlib import Path

    app = Flask(__name__, instance_path=str(Path(__file__).parent.parent / 'instance'))

    logger = get_logger("cmms.app")
    logger.info("Initializing Flask application")

    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')

    # Prefer an explicit DATABASE_URL; otherwise keep SQLite under instance/
    db_env = os.environ.get('DATABASE_URL')
    if db_env:
        app.config['SQLALCHEMY_DATABASE_URI'] = db_env
    else:
        instance_dir = Path(app.instance_path)
        instance_dir.mkdir(parents=True, exist_ok=True)
        default_db_path = instance_dir / 'cmms.db'
        app.config['SQLALCHEMY_DATABASE_URI'] = f"sqlite:///{str(default_db_path.resolve())}"

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    # Session cookie security; only relax for local HTTP development
    app.config['SESSION_COOKIE_SECURE'] = _env_flag('SESSION_COOKIE_SECURE', 'True')
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
    app.config['PERMANENT_SESSION_LIFETIME'] = int(os.environ.get('PERMANENT_SESSION_LIFETIME', '3600'))
    app.config['REMEMBER_COOKIE_SECURE'] = _env_flag('REMEMBER_COOKIE_SECURE', 'True')
    app.config['REMEMBER_COOKIE_HTTPONLY'] = True

    # The SPA sends the token in a header, see /api/csrf-token
    app.config['WTF_CSRF_HEADERS'] = ['X-CSRFToken', 'X-CSRF-Token']

    app.config['RATELIMIT_DEFAULT'] = os.environ.get('RATELIMIT_DEFAULT', '2000 per day;500 per hour')

    # Maintenance scheduling
    app.config['MAINTENANCE_HORIZON_MONTHS'] = int(os.environ.get('MAINTENANCE_HORIZON_MONTHS', '12'))
    app.config['MAINTENANCE_STRATEGY'] = os.environ.get('MAINTENANCE_STRATEGY', 'fixed')

    app.config['ADMIN_USERNAME'] = os.environ.get('ADMIN_USERNAME', 'admin')
    app.config['ADMIN_PASSWORD'] = os.environ.get('ADMIN_PASSWORD')

    if config_overrides:
        app.config.update(config_overrides)

    # SECURITY: no fallback secret
    if not app.config['SECRET_KEY']:
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")

    if not app.config['SESSION_COOKIE_SECURE']:
        logger.warning("Secure session cookies DISABLED - acceptable for development only")

    logger.debug(f"Database configured: {app.config['SQLALCHEMY_DATABASE_URI'].split(':', 1)[0]}")

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    logger.debug("Extensions initialized")

    # Import models so they are registered with SQLAlchemy
    from cmms.data.core.user_info.user import User  # noqa: F401
    from cmms.data.core.asset_info.asset import Asset  # noqa: F401
    from cmms.data.work_orders.work_order import WorkOrder  # noqa: F401
    from cmms.data.maintenance.maintenance_schedules import MaintenanceSchedule  # noqa: F401
    from cmms.data.maintenance.maintenance_completions import MaintenanceCompletion  # noqa: F401
    from cmms.data.problems.problem_button import ProblemButton  # noqa: F401
    from cmms.data.problems.problem_event import ProblemEvent  # noqa: F401
    from cmms.data.core.settings import AppSettings  # noqa: F401

    logger.debug("Models imported and registered")

    # Register blueprints
    from cmms.auth import auth
    from cmms.presentation.routes import init_app as init_routes
    from cmms.presentation.routes.errors import register_error_handlers

    app.register_blueprint(auth, url_prefix='/api')
    init_routes(app)
    register_error_handlers(app)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'message': 'Authentication required'}), 401

    # Add security headers to all responses
    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Content-Security-Policy'] = "default-src 'none'; frame-ancestors 'none'"
        if app.config.get('SESSION_COOKIE_SECURE'):
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response

    logger.info("Flask application initialization complete")

    return app
