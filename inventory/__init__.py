"""Flask application factory."""
from flask import Flask, render_template, request, redirect, url_for, flash, jsonify
from flask_wtf.csrf import CSRFProtect, CSRFError
from werkzeug.exceptions import HTTPException
from inventory.services.catalog_store import init_catalog
import os


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    csrf = CSRFProtect(app)

    def wants_json():
        return request.is_json or request.path.startswith('/api/')

    def is_htmx():
        return request.headers.get('HX-Request') == 'true'

    @app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        app.logger.warning(f"CSRF Error: {e.description}")
        if wants_json() or is_htmx():
            return jsonify({'status': 'error', 'message': 'Session expired. Reload the page.'}), 400
        flash('Your session expired or the form was invalid. Please try again.', 'warning')
        return redirect(url_for('inventory.index'))

    # Error tracking in production only
    sentry_dsn = app.config.get('SENTRY_DSN') or os.getenv('SENTRY_DSN')
    if sentry_dsn and app.config.get('ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment=app.config.get('ENV'),
            release=os.getenv('GIT_COMMIT', 'unknown')
        )

    from inventory.blueprints.metrics import setup_metrics_instrumentation
    setup_metrics_instrumentation(app)

    # In-memory catalog, seeded per app instance
    init_catalog(app)

    from inventory.utils.formatters import qty, or_dash
    app.jinja_env.filters['qty'] = qty
    app.jinja_env.filters['or_dash'] = or_dash

    # Error Handlers
    from inventory.exceptions import InventoryError

    @app.errorhandler(InventoryError)
    def handle_inventory_error(error):
        """Handle custom application exceptions."""
        app.logger.error(f"InventoryError [{error.status_code}]: {error.message}")

        if wants_json():
            return jsonify(error.to_dict()), error.status_code

        if is_htmx():
            return render_template('errors/_alert.html', message=error.message), error.status_code

        flash(error.message, 'danger')
        return redirect(url_for('inventory.index'))

    @app.errorhandler(404)
    def not_found_error(error):
        if wants_json():
            return jsonify({'status': 'error', 'message': 'Not Found'}), 404
        return render_template('errors/404.html'), 404

    @app.errorhandler(Exception)
    def internal_error(error):
        if isinstance(error, HTTPException):
            return error

        app.logger.exception(f"Unhandled Exception: {error}")

        if wants_json():
            return jsonify({'status': 'error', 'message': 'Internal Server Error'}), 500

        if is_htmx():
            return render_template('errors/_alert.html', message='Internal server error.'), 500

        return render_template('errors/500.html'), 500

    # Register blueprints
    from inventory.blueprints.main import main_bp
    from inventory.blueprints.inventory import inventory_bp
    from inventory.blueprints.api import api_bp
    from inventory.blueprints.metrics import metrics_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(inventory_bp)
    app.register_blueprint(metrics_bp)

    # JSON clients do not carry a CSRF token
    csrf.exempt(api_bp)
    app.register_blueprint(api_bp)

    from inventory.cli_commands import init_cli_commands
    init_cli_commands(app)

    app.logger.info(
        f"Catalog latency list={app.config.get('CATALOG_LIST_LATENCY_MS')}ms "
        f"adjust={app.config.get('CATALOG_ADJUST_LATENCY_MS')}ms"
    )

    return app
