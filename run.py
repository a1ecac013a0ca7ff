"""
Development server entry point.

Run this script to start the bingo server with Socket.IO support. The
listening port comes from the PORT environment variable (default 3001).
"""

import os

from loguru import logger

from src.bingo.app import create_app, start_catalog_watcher

if __name__ == '__main__':
    app, socketio = create_app()
    start_catalog_watcher(app, socketio)
    port = int(os.environ.get('PORT', 3001))
    logger.info(f"Bingo server listening on http://localhost:{port}")
    logger.info(f"Admin interface: http://localhost:{port}/admin")
    socketio.run(app, debug=True, host='0.0.0.0', port=port, use_reloader=False)
