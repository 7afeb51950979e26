"""
Authentication Decorators

Contains the decorator guarding per-user HTTP endpoints.
"""

from functools import wraps
from flask import request, jsonify, current_app


def get_request_token():
    """Session credential from the Authorization header or the session cookie."""
    auth_header = request.headers.get('Authorization')
    if auth_header and auth_header.startswith('Bearer '):
        return auth_header.split(' ', 1)[1]
    return request.cookies.get(current_app.config.get('SESSION_COOKIE_NAME_TOKEN', 'session_token'))


def require_auth(f):
    """
    Decorator to require authentication for protected HTTP endpoints.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.auth_service import get_auth_service

        auth_service = get_auth_service()
        if not auth_service:
            return jsonify({
                'success': False,
                'error': 'Authentication service unavailable'
            }), 500

        token = get_request_token()
        if not token:
            return jsonify({
                'success': False,
                'error': 'unauthorized'
            }), 401

        # Verify token
        result = auth_service.verify_token(token)
        if not result['success']:
            return jsonify({
                'success': False,
                'error': result['error']
            }), 401

        # Add user data to request context
        request.user = result['user']
        return f(*args, **kwargs)

    return decorated_function
