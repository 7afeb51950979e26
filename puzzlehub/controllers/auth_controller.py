"""
Authentication Controller

Handles all authentication-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify, current_app
from ..services.auth_service import get_auth_service
from ..utils.decorators import get_request_token
from ..utils.game_logger import game_logger

auth_bp = Blueprint('auth', __name__)


def _cookie_name():
    return current_app.config.get('SESSION_COOKIE_NAME_TOKEN', 'session_token')


@auth_bp.route('/register', methods=['POST'])
def register():
    """Register a new user."""
    try:
        auth_service = get_auth_service()
        if not auth_service:
            return jsonify({
                'success': False,
                'error': 'Authentication service unavailable'
            }), 500

        data = request.get_json(silent=True)
        if not data:
            return jsonify({
                'success': False,
                'error': 'Request body is required'
            }), 400

        username = data.get('username')
        password = data.get('password')

        game_logger.log_user_action(request, 'register', username=username)

        result = auth_service.register_user(username, password)

        if result['success']:
            game_logger.log_server_response(request, 'register', True, result)
            return jsonify(result), 201
        else:
            game_logger.log_server_response(request, 'register', False, result)
            return jsonify(result), 400

    except Exception as e:
        game_logger.log_error(request, e, 'register')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'register', False, error_response)
        return jsonify(error_response), 500


@auth_bp.route('/login', methods=['POST'])
def login():
    """Login a user, return the JWT and set it as the session cookie."""
    try:
        auth_service = get_auth_service()
        if not auth_service:
            return jsonify({
                'success': False,
                'error': 'Authentication service unavailable'
            }), 500

        data = request.get_json(silent=True)
        if not data:
            return jsonify({
                'success': False,
                'error': 'Request body is required'
            }), 400

        username = data.get('username')
        password = data.get('password')

        game_logger.log_user_action(request, 'login', username=username)

        result = auth_service.login_user(username, password)

        if not result['success']:
            game_logger.log_server_response(request, 'login', False, result)
            return jsonify(result), 401

        game_logger.log_server_response(request, 'login', True, {
            'success': True,
            'user': result['user']  # Don't log the token
        })
        response = jsonify(result)
        response.set_cookie(
            _cookie_name(),
            result['token'],
            max_age=auth_service.expiration_days * 24 * 3600,
            httponly=True,
            samesite='Lax',
            secure=not current_app.config.get('DEBUG', False)
        )
        return response

    except Exception as e:
        game_logger.log_error(request, e, 'login')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'login', False, error_response)
        return jsonify(error_response), 500


@auth_bp.route('/me', methods=['GET'])
def me():
    """
    Report whether the caller is signed in.

    Never answers 401: a missing or invalid credential is reported as
    signedIn false so clients can resolve their auth state.
    """
    try:
        auth_service = get_auth_service()
        if not auth_service:
            return jsonify({
                'success': False,
                'error': 'Authentication service unavailable'
            }), 500

        token = get_request_token()
        user = None
        if token:
            result = auth_service.verify_token(token)
            if result['success']:
                user = result['user']
                request.user = user

        response_data = {
            'success': True,
            'signedIn': user is not None,
            'user': user
        }
        game_logger.log_server_response(request, 'me', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'me')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'me', False, error_response)
        return jsonify(error_response), 500


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Logout a user by clearing the session cookie."""
    try:
        auth_service = get_auth_service()
        if not auth_service:
            return jsonify({
                'success': False,
                'error': 'Authentication service unavailable'
            }), 500

        username = None
        token = get_request_token()
        if token:
            verify_result = auth_service.verify_token(token)
            if verify_result['success']:
                username = verify_result['user']['username']

        game_logger.log_user_action(request, 'logout', user=username or 'unknown')

        response_data = {
            'success': True,
            'message': 'Logged out successfully'
        }
        game_logger.log_server_response(request, 'logout', True, response_data)
        response = jsonify(response_data)
        response.delete_cookie(_cookie_name())
        return response

    except Exception as e:
        game_logger.log_error(request, e, 'logout')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'logout', False, error_response)
        return jsonify(error_response), 500
