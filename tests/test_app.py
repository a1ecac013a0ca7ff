"""
Tests for Flask application factory and basic functionality.
"""

from src.bingo.app import create_app
from src.bingo.session import SessionManager
from src.bingo.theme_catalog import CatalogWatcher, ThemeCatalog


def test_create_app(themes_file, admin_config_file):
    """Test that the app factory creates a valid Flask app."""
    app, socketio = create_app({'THEMES_FILE': str(themes_file),
                                'ADMIN_CONFIG_FILE': str(admin_config_file)})
    assert app is not None
    assert socketio is not None
    assert app.config['SECRET_KEY'] is not None
    assert isinstance(app.extensions['theme_catalog'], ThemeCatalog)
    assert isinstance(app.extensions['catalog_watcher'], CatalogWatcher)
    assert isinstance(app.extensions['bingo_sessions'], SessionManager)
    assert len(app.extensions['theme_catalog']) == 2


def test_config_overrides(app):
    sessions = app.extensions['bingo_sessions']
    assert sessions.default_room_id == 'ai-lowcode'
    assert sessions.leaderboard_size == 10
    assert app.config['TESTING'] is True


def test_missing_themes_file_starts_empty(tmp_path):
    app, _ = create_app({'THEMES_FILE': str(tmp_path / "nope.json")})
    assert len(app.extensions['theme_catalog']) == 0
