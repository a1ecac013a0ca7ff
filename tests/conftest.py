import json

import pytest

from src.bingo.app import create_app

NINE_WORDS = [f"word {i}" for i in range(9)]

ADMIN_USER = 'admin'
ADMIN_PASSWORD = 'secret'


@pytest.fixture
def nine_words():
    """A valid word list for a theme."""
    return list(NINE_WORDS)


@pytest.fixture
def admin_credentials():
    """The (username, password) pair written to the admin config file."""
    return ADMIN_USER, ADMIN_PASSWORD


@pytest.fixture
def themes_file(tmp_path):
    path = tmp_path / "themes.json"
    path.write_text(json.dumps({
        'meeting': {'title': 'Meeting', 'color': '#e17055', 'words': NINE_WORDS},
        'agile': {'title': 'Agile', 'color': '#00b894', 'words': NINE_WORDS},
    }), encoding='utf-8')
    return path


@pytest.fixture
def admin_config_file(tmp_path):
    path = tmp_path / "admin-config.json"
    path.write_text(json.dumps({'username': ADMIN_USER, '_password_plain': ADMIN_PASSWORD}),
                    encoding='utf-8')
    return path


@pytest.fixture
def app(themes_file, admin_config_file):
    """Create a test Flask application."""
    app, socketio = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'THEMES_FILE': str(themes_file),
        'ADMIN_CONFIG_FILE': str(admin_config_file),
    })
    app.socketio = socketio  # Store socketio instance for testing
    return app


@pytest.fixture
def client(app):
    return app.test_client()
