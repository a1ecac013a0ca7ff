"""
HTTP API routes for the bingo server.

This module implements the public theme listing and the admin endpoints for
editing the theme catalog.
"""

from flask import Blueprint, current_app, jsonify, request
from loguru import logger

from .admin_auth import check_credentials, create_admin_token, require_admin
from .theme_catalog import ThemeValidationError

api_bp = Blueprint('api', __name__, url_prefix='/api')


def get_catalog():
    return current_app.extensions['theme_catalog']


@api_bp.route('/themes', methods=['GET'])
def list_themes():
    """Return the full theme catalog."""
    return jsonify(get_catalog().as_dict()), 200


@api_bp.route('/admin/login', methods=['POST'])
def admin_login():
    """Exchange admin credentials for a session token.

    Accepts HTTP Basic credentials or a JSON body with username/password.
    """
    auth = request.authorization
    if auth is not None and auth.type == 'basic':
        username, password = auth.username, auth.password
    else:
        data = request.get_json(silent=True) or {}
        username, password = data.get('username'), data.get('password')

    if not username or not password:
        return jsonify({'success': False, 'error': 'Username and password are required'}), 400

    if not check_credentials(username, password):
        logger.warning(f"Failed admin login for '{username}'")
        return jsonify({'success': False, 'error': 'Invalid username or password'}), 401

    logger.info(f"Admin '{username}' logged in")
    return jsonify({
        'success': True,
        'data': {'token': create_admin_token(username)}
    }), 200


@api_bp.route('/admin/themes', methods=['GET'])
@require_admin
def admin_list_themes():
    return jsonify(get_catalog().as_dict()), 200


@api_bp.route('/admin/themes', methods=['POST'])
@require_admin
def admin_save_themes():
    """Replace the whole catalog with the posted themes."""
    data = request.get_json(silent=True)
    if data is None:
        return jsonify({'success': False, 'error': 'Request body must be JSON'}), 400

    try:
        themes = get_catalog().replace(data)
    except ThemeValidationError as e:
        logger.warning(f"Rejected theme update: {e}")
        return jsonify({'success': False, 'error': str(e)}), 400

    logger.info(f"Admin saved {len(themes)} themes")
    return jsonify({'success': True, 'message': 'Themes saved'}), 200


@api_bp.route('/admin/themes/<theme_id>', methods=['DELETE'])
@require_admin
def admin_delete_theme(theme_id):
    if not get_catalog().delete(theme_id):
        return jsonify({'success': False, 'error': 'Theme not found'}), 404

    logger.info(f"Admin deleted theme '{theme_id}'")
    return jsonify({'success': True, 'message': 'Theme deleted'}), 200
