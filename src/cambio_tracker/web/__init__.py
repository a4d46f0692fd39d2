"""
Flask application factory.
"""
import os
from flask import Flask
from .extensions import cors
from .config import config


def create_app(config_name: str = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # Load config
    env = config_name or os.getenv('FLASK_ENV', 'development')
    app.config.from_object(config.get(env, config['default']))

    # Init extensions
    cors.init_app(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}})

    # Register blueprints
    from .api.health import bp as health_bp
    from .api.rounds import bp as rounds_bp
    from .api.stats import bp as stats_bp
    from .api.data import bp as data_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(rounds_bp, url_prefix='/api/rounds')
    app.register_blueprint(stats_bp)
    app.register_blueprint(data_bp, url_prefix='/api/data')

    return app
