"""
Puzzle Hub Application Package

Daily word puzzles (Wordle, Connections, Strands) with local-first
progress and results that sync to a per-user result store once the
player signs in.

The Flask side serves the puzzle proxy, the result store and the sign-in
surface; the client side (engines, sessions, storage, sync) runs the
games and decides where progress goes.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app, supports_credentials=True)

    # Register blueprints
    from .controllers.auth_controller import auth_bp
    from .controllers.game_controller import game_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(game_bp, url_prefix='/api')

    return app
