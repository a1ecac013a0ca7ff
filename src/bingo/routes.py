"""
Flask routes for the bingo pages.

The theme picker is a static page; each theme gets its own page rendered
from theme.html with the theme's ID, title and color.
"""

from flask import Blueprint, abort, current_app, render_template

from .theme_catalog import THEME_ID_PATTERN

bp = Blueprint('main', __name__)


@bp.route('/')
def index():
    """Theme picker."""
    return current_app.send_static_file('index.html')


@bp.route('/admin')
def admin():
    """Theme catalog editor."""
    return render_template('admin.html')


@bp.route('/<theme_id>')
def theme_page(theme_id):
    """Bingo board for one theme."""
    if not THEME_ID_PATTERN.match(theme_id):
        abort(404)
    theme = current_app.extensions['theme_catalog'].get_theme(theme_id)
    if theme is None:
        abort(404, description='Theme not found')
    return render_template('theme.html',
                           THEME_ID=theme.id,
                           THEME_TITLE=theme.title,
                           THEME_COLOR=theme.color,
                           words=theme.words)
