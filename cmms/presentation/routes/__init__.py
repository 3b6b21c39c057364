"""
Routes package for the CMMS API
Organized in a tiered structure mirroring the model organization
"""

from cmms.logger import get_logger

logger = get_logger("cmms.routes")


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from .core import assets, settings, users, work_orders
    from .maintenance import analytics, calendar, dashboard, maintenance_completions, maintenance_schedules
    from .problems import problem_buttons, problem_events

    app.register_blueprint(users.bp, url_prefix='/api')
    app.register_blueprint(assets.bp, url_prefix='/api')
    app.register_blueprint(work_orders.bp, url_prefix='/api')
    app.register_blueprint(settings.bp, url_prefix='/api')

    app.register_blueprint(maintenance_schedules.bp, url_prefix='/api')
    app.register_blueprint(maintenance_completions.bp, url_prefix='/api')
    app.register_blueprint(dashboard.bp, url_prefix='/api')
    app.register_blueprint(calendar.bp, url_prefix='/api')
    app.register_blueprint(analytics.bp, url_prefix='/api')

    app.register_blueprint(problem_buttons.bp, url_prefix='/api')
    app.register_blueprint(problem_events.bp, url_prefix='/api')

    logger.info("Registered API blueprints")
