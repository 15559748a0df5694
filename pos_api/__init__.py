"""Flask application factory."""
import atexit
import os
import traceback

from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException

from pos_api.database import init_db


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Initialize Sentry for error tracking in production
    if os.getenv('SENTRY_DSN') and app.config.get('ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=os.getenv('SENTRY_DSN'),
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
            environment=app.config.get('ENV'),
            release=os.getenv('GIT_COMMIT', 'unknown')
        )

    # Setup Prometheus metrics instrumentation
    from pos_api.blueprints.metrics import setup_metrics_instrumentation
    setup_metrics_instrumentation(app)

    # Production: Enable ProxyFix for HTTPS behind a reverse proxy
    if app.config.get('ENV') == 'production':
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(
            app.wsgi_app,
            x_for=1,      # Trust X-Forwarded-For with 1 proxy
            x_proto=1,    # Trust X-Forwarded-Proto
            x_host=1,     # Trust X-Forwarded-Host
            x_port=1,     # Trust X-Forwarded-Port
            x_prefix=0    # No prefix (not behind a URL prefix)
        )

    # Initialize database; the engine lives as long as the process
    database = init_db(app)
    atexit.register(database.dispose)

    from pos_api.middleware import load_user_from_token, apply_cors_headers
    from pos_api.utils.responses import send_response

    @app.before_request
    def before_request_handler():
        """Answer CORS preflight, then resolve the bearer token."""
        if request.method == 'OPTIONS':
            return app.response_class(status=204)
        load_user_from_token()

    app.after_request(apply_cors_headers)

    # Error Handlers
    from pos_api.exceptions import PosError

    @app.errorhandler(PosError)
    def handle_pos_error(error):
        """Handle custom application exceptions."""
        if error.status_code >= 500:
            app.logger.error(f"PosError [{error.status_code}]: {error.error}")
        else:
            app.logger.info(f"PosError [{error.status_code}]: {error.error}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if error.code == 404:
            return send_response(404, 'Not found', None, 'Not found')
        if error.code == 405:
            return send_response(404, 'Not found', None, 'Incorrect request method')
        return send_response(error.code, error.name, None, error.description)

    @app.errorhandler(Exception)
    def internal_error(error):
        app.logger.error(f"Unhandled Exception: {error}")
        app.logger.error(f"Traceback: {traceback.format_exc()}")
        return send_response(500, 'Internal Server Error', None, 'Internal Server Error')

    # Register blueprints
    from pos_api.blueprints.auth import auth_bp
    from pos_api.blueprints.catalog import catalog_bp
    from pos_api.blueprints.cart import cart_bp
    from pos_api.blueprints.orders import orders_bp
    from pos_api.blueprints.metrics import metrics_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(metrics_bp)

    # Register CLI commands
    from pos_api.cli_commands import init_cli_commands
    init_cli_commands(app)

    return app
