"""
Credential checks for the admin API.

The admin username and password live in a small JSON file that is read on
every check, so editing it takes effect without a restart. Requests
authenticate either with HTTP Basic credentials or with a bearer token
issued by the admin login endpoint.
"""

import json
from datetime import datetime, timedelta, timezone
from functools import wraps

import jwt
from flask import current_app, jsonify, request
from loguru import logger

TOKEN_LIFETIME = timedelta(hours=24)


def load_admin_credentials(path):
    """Return the stored (username, password) pair, or None if unavailable."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read admin config {path}: {e}")
        return None

    username = config.get('username')
    password = config.get('_password_plain', config.get('password'))
    if not username or not password:
        logger.error(f"Admin config {path} has no username/password")
        return None
    return username, password


def check_credentials(username, password):
    """Compare a username/password pair with the stored admin credentials."""
    stored = load_admin_credentials(current_app.config['ADMIN_CONFIG_FILE'])
    if stored is None:
        return False
    return (username, password) == stored


def create_admin_token(username):
    """Create a JWT admin token."""
    payload = {
        'username': username,
        'role': 'admin',
        'exp': datetime.now(timezone.utc) + TOKEN_LIFETIME
    }
    return jwt.encode(payload, current_app.config['SECRET_KEY'], algorithm='HS256')


def verify_admin_token(token):
    """Verify and decode a JWT admin token."""
    try:
        payload = jwt.decode(token, current_app.config['SECRET_KEY'], algorithms=['HS256'])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None
    if payload.get('role') != 'admin':
        return None
    return payload


def is_admin_request():
    """True if the current request carries valid admin credentials."""
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        return verify_admin_token(auth_header.split(' ', 1)[1]) is not None

    auth = request.authorization
    if auth is None or auth.type != 'basic':
        return False
    return check_credentials(auth.username, auth.password)


def unauthorized():
    response = jsonify({'success': False, 'error': 'Unauthorized'})
    response.status_code = 401
    response.headers['WWW-Authenticate'] = 'Basic realm="Admin Area"'
    return response


def require_admin(f):
    """Decorator to require admin credentials for API endpoints."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_admin_request():
            logger.warning(f"Rejected admin request {request.method} {request.path}")
            return unauthorized()
        return f(*args, **kwargs)
    return decorated_function
