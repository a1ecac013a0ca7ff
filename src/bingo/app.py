"""
Flask application factory and main application entry point.

This module creates and configures the Flask application instance
with Socket.IO support for the realtime leaderboard.
"""

import os
import sys

from flask import Flask
from flask_socketio import SocketIO
from flask_cors import CORS
from loguru import logger

from .broadcast import BroadcastChannel
from .room_registry import RoomRegistry
from .session import DEFAULT_ROOM_ID, SessionManager
from .theme_catalog import CatalogWatcher, ThemeCatalog


def create_app(config=None):
    """
    Create and configure the Flask application.

    Args:
        config: Dictionary of configuration overrides

    Returns:
        Tuple of the Flask application and its SocketIO instance
    """
    app = Flask(__name__)

    # Default configuration
    app.config.update({
        'SECRET_KEY': os.environ.get('SECRET_KEY', 'dev-key-change-in-production'),
        'THEMES_FILE': os.environ.get('BINGO_THEMES_FILE', os.path.abspath('themes.json')),
        'ADMIN_CONFIG_FILE': os.environ.get('BINGO_ADMIN_CONFIG', os.path.abspath('admin-config.json')),
        'DEFAULT_ROOM_ID': DEFAULT_ROOM_ID,
        'LEADERBOARD_SIZE': 10,
        'CATALOG_POLL_SECONDS': 1.0,
        'LOG_LEVEL': os.environ.get('LOG_LEVEL', 'INFO'),
    })

    if config:
        app.config.update(config)

    # Configure logging
    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        format="{time} | {level} | {message}",
        level=app.config['LOG_LEVEL'],
        colorize=True
    )
    logger.info("Starting bingo server")

    # Enable CORS for all HTTP requests
    CORS(app, origins="*")

    # Initialize SocketIO for the realtime leaderboard
    socketio = SocketIO(app, cors_allowed_origins="*")

    catalog = ThemeCatalog(app.config['THEMES_FILE'])
    catalog.load()
    app.extensions['theme_catalog'] = catalog
    app.extensions['catalog_watcher'] = CatalogWatcher(
        catalog, interval=app.config['CATALOG_POLL_SECONDS'], sleep=socketio.sleep)

    channel = BroadcastChannel(lambda sid, text: socketio.send(text, to=sid))
    sessions = SessionManager(RoomRegistry(), channel,
                              default_room_id=app.config['DEFAULT_ROOM_ID'],
                              leaderboard_size=app.config['LEADERBOARD_SIZE'])
    app.extensions['bingo_sessions'] = sessions

    # Register blueprints/routes here
    from . import api
    app.register_blueprint(api.api_bp)

    from . import routes
    app.register_blueprint(routes.bp)

    # Initialize Socket.IO handlers
    from . import websocket_handlers
    websocket_handlers.init_socketio_handlers(socketio, sessions)

    return app, socketio


def start_catalog_watcher(app, socketio):
    """Run the themes file watcher as a Socket.IO background task."""
    return socketio.start_background_task(app.extensions['catalog_watcher'].run)
