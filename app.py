"""
Portfolio - Main Application Entry Point
Application Factory Pattern for a bilingual single-page portfolio

This module initializes the Flask application with its extensions,
configuration and hooks. Route handling is delegated to blueprints.
"""

import os
from datetime import datetime
from flask import Flask, render_template, request, jsonify
from config import get_config
from extensions import db, state_registry
from utils.data import load_portfolio
from utils.i18n import LocaleCatalog
from utils.theme import PREFERS_COLOR_SCHEME_HEADER
from utils.transitions import create_scheduler

# Import all blueprints
from blueprints.pages import pages_bp
from blueprints.preferences import preferences_bp
from blueprints.contact import contact_bp


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    conf = get_config(config_name)
    app.config.from_object(conf)

    # Initialize extensions with app
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Portfolio is running'}, 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)

    # Create tables if they don't exist
    with app.app_context():
        try:
            from sqlalchemy import text
            import models  # noqa: F401
            db.create_all()
            # Verify connection
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database initialized successfully")
        except Exception as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")

    # Locale key sets are checked here; a gap stops the app from starting
    catalog = LocaleCatalog.from_folder(app.config['LOCALES_FOLDER'])
    app.logger.info(f"✓ Loaded locales {', '.join(catalog.languages)} ({len(catalog.keys)} keys)")

    app.extensions['portfolio_data'] = load_portfolio(app.config['PORTFOLIO_DATA_FILE'])

    scheduler = create_scheduler(app.config['TRANSITION_SCHEDULER'])
    state_registry.init_app(app, catalog=catalog, scheduler=scheduler)


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(pages_bp)
    app.register_blueprint(preferences_bp)
    app.register_blueprint(contact_bp)


def register_error_handlers(app):
    """Register custom error handlers"""

    def _error_response(status, title, description):
        if request.accept_mimetypes.best_match(['application/json', 'text/html']) == 'application/json':
            return jsonify({'error': title, 'message': description}), status
        return render_template('error.html', status=status, title=title,
                               description=description), status

    @app.errorhandler(400)
    def bad_request(e):
        return _error_response(400, 'Bad Request', e.description)

    @app.errorhandler(404)
    def page_not_found(e):
        return _error_response(404, 'Not Found', e.description)

    @app.errorhandler(409)
    def conflict(e):
        return _error_response(409, 'Conflict', e.description)

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}")
        return _error_response(500, 'Server Error', 'Something went wrong.')


def register_hooks(app):
    """Register request/response hooks and context processors"""

    @app.context_processor
    def inject_global_vars():
        """Values that do not depend on the visitor"""
        return {
            'current_year': datetime.now().year,
        }

    @app.after_request
    def add_security_headers(response):
        """Add security headers and request the color-scheme client hint"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Accept-CH'] = PREFERS_COLOR_SCHEME_HEADER
        response.headers['Critical-CH'] = PREFERS_COLOR_SCHEME_HEADER
        response.vary.add(PREFERS_COLOR_SCHEME_HEADER)
        return response


if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=5000,
        debug=(env == 'development')
    )
