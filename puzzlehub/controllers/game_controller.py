"""
Game Controller

Handles the puzzle proxy, per-user progress, win/loss recording, stats and
Strands word classification endpoints.
"""

import re

from flask import Blueprint, request, jsonify, current_app
from ..exceptions import StorageCorrupt, UpstreamUnavailable
from ..models.game import EventKind, GameKind
from ..models.progress import PendingEvent, progress_from_dict
from ..services.puzzle_service import get_puzzle_service
from ..services.result_service import get_result_service
from ..utils.decorators import require_auth
from ..utils.game_logger import game_logger
from ..utils.helpers import is_valid_date, puzzle_date

game_bp = Blueprint('game', __name__)

WORD_PATTERN = re.compile(r'^[A-Za-z]{2,}$')


def _resolve_game(game):
    try:
        return GameKind(game)
    except ValueError:
        return None


def _unknown_game(game):
    return jsonify({
        'success': False,
        'error': f'Unknown game "{game}"'
    }), 404


def _service_unavailable(name):
    return jsonify({
        'success': False,
        'error': f'{name} service unavailable'
    }), 500


def _today():
    return puzzle_date(timezone=current_app.config.get('PUZZLE_TIMEZONE', 'America/New_York'))


@game_bp.route('/<game>/<date>', methods=['GET'])
def get_puzzle(game, date):
    """Proxy the validated daily puzzle of one date."""
    kind = _resolve_game(game)
    if kind is None:
        return _unknown_game(game)

    try:
        puzzle_service = get_puzzle_service()
        if not puzzle_service:
            return _service_unavailable('Puzzle')

        game_logger.log_user_action(request, 'get_puzzle', kind.value, date=date)

        if not is_valid_date(date):
            error_response = {
                'success': False,
                'error': 'Invalid date, expected YYYY-MM-DD'
            }
            game_logger.log_server_response(request, 'get_puzzle', False, error_response, kind.value)
            return jsonify(error_response), 400

        try:
            puzzle = puzzle_service.get_puzzle(kind, date)
        except UpstreamUnavailable as e:
            error_response = {
                'success': False,
                'error': str(e),
                'upstream_status': e.status
            }
            game_logger.log_server_response(request, 'get_puzzle', False, error_response, kind.value)
            return jsonify(error_response), 502

        response_data = {
            'success': True,
            'puzzle': puzzle.to_dict()
        }
        game_logger.log_server_response(request, 'get_puzzle', True, response_data, kind.value, date=date)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_puzzle', kind.value)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_puzzle', False, error_response, kind.value)
        return jsonify(error_response), 500


@game_bp.route('/<game>/progress', methods=['GET'])
@require_auth
def get_progress(game):
    """Get the caller's stored snapshot for one date."""
    kind = _resolve_game(game)
    if kind is None:
        return _unknown_game(game)

    try:
        result_service = get_result_service()
        if not result_service:
            return _service_unavailable('Result')

        date = request.args.get('date') or _today()
        game_logger.log_user_action(request, 'get_progress', kind.value, date=date)

        if not is_valid_date(date):
            error_response = {
                'success': False,
                'error': 'Invalid date, expected YYYY-MM-DD'
            }
            game_logger.log_server_response(request, 'get_progress', False, error_response, kind.value)
            return jsonify(error_response), 400

        snapshot = result_service.get_progress(request.user['id'], kind, date)
        response_data = {
            'success': True,
            'progress': snapshot.to_dict() if snapshot else None
        }
        game_logger.log_server_response(request, 'get_progress', True, response_data, kind.value)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_progress', kind.value)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_progress', False, error_response, kind.value)
        return jsonify(error_response), 500


@game_bp.route('/<game>/progress', methods=['POST'])
@require_auth
def save_progress(game):
    """Merge-write the caller's snapshot for one date."""
    kind = _resolve_game(game)
    if kind is None:
        return _unknown_game(game)

    try:
        result_service = get_result_service()
        if not result_service:
            return _service_unavailable('Result')

        data = request.get_json(silent=True)
        game_logger.log_user_action(request, 'save_progress', kind.value)

        try:
            snapshot = progress_from_dict(kind, data)
        except StorageCorrupt as e:
            error_response = {
                'success': False,
                'error': f'Invalid progress: {e}'
            }
            game_logger.log_server_response(request, 'save_progress', False, error_response, kind.value)
            return jsonify(error_response), 400

        result_service.set_progress(request.user['id'], snapshot)

        response_data = {
            'success': True,
            'progress': snapshot.to_dict()
        }
        game_logger.log_server_response(request, 'save_progress', True, response_data, kind.value,
                                        date=snapshot.date)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'save_progress', kind.value)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'save_progress', False, error_response, kind.value)
        return jsonify(error_response), 500


def _record(game, event_kind):
    kind = _resolve_game(game)
    if kind is None:
        return _unknown_game(game)

    action = f'record_{event_kind.value}'
    try:
        result_service = get_result_service()
        if not result_service:
            return _service_unavailable('Result')

        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            data = {}
        raw = {**data, 'type': event_kind.value}
        raw.setdefault('date', _today())

        game_logger.log_user_action(request, action, kind.value, date=raw['date'])

        try:
            event = PendingEvent.from_dict(kind, raw)
        except StorageCorrupt as e:
            error_response = {
                'success': False,
                'error': f'Invalid result: {e}'
            }
            game_logger.log_server_response(request, action, False, error_response, kind.value)
            return jsonify(error_response), 400

        user_id = request.user['id']
        increments = result_service.record_result(user_id, event)
        stats = result_service.get_stats(user_id, kind)

        game_logger.log_game_event(kind.value, f'game_{"won" if event_kind == EventKind.WIN else "lost"}',
                                   user_id=user_id, date=event.date, **event.detail)

        response_data = {
            'success': True,
            'incremented': sorted(increments),
            'stats': stats.to_dict()
        }
        game_logger.log_server_response(request, action, True, response_data, kind.value)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, action, kind.value)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, action, False, error_response, kind.value)
        return jsonify(error_response), 500


@game_bp.route('/<game>/win', methods=['POST'])
@require_auth
def record_win(game):
    """Record a win for the caller."""
    return _record(game, EventKind.WIN)


@game_bp.route('/<game>/loss', methods=['POST'])
@require_auth
def record_loss(game):
    """Record a loss for the caller."""
    return _record(game, EventKind.LOSS)


@game_bp.route('/<game>/stats', methods=['GET'])
@require_auth
def get_stats(game):
    """Get the caller's lifetime stats and raw counters for one game."""
    kind = _resolve_game(game)
    if kind is None:
        return _unknown_game(game)

    try:
        result_service = get_result_service()
        if not result_service:
            return _service_unavailable('Result')

        game_logger.log_user_action(request, 'get_stats', kind.value)

        user_id = request.user['id']
        counters = result_service.get_counters(user_id, kind)
        response_data = {
            'success': True,
            'stats': result_service.get_stats(user_id, kind).to_dict(),
            'counters': counters
        }
        game_logger.log_server_response(request, 'get_stats', True, response_data, kind.value)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_stats', kind.value)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_stats', False, error_response, kind.value)
        return jsonify(error_response), 500


@game_bp.route('/strands/submit', methods=['POST'])
def classify_strands_word():
    """Classify a traced Strands word as theme, spangram or other."""
    game = GameKind.STRANDS.value
    try:
        puzzle_service = get_puzzle_service()
        if not puzzle_service:
            return _service_unavailable('Puzzle')

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({
                'success': False,
                'error': 'Request body is required'
            }), 400

        word = data.get('word')
        date = data.get('date') or _today()

        game_logger.log_user_action(request, 'classify_word', game, date=date)

        if not isinstance(word, str) or not WORD_PATTERN.match(word.strip()) or not is_valid_date(date):
            error_response = {
                'success': False,
                'error': 'A date (YYYY-MM-DD) and a word of at least 2 letters are required'
            }
            game_logger.log_server_response(request, 'classify_word', False, error_response, game)
            return jsonify(error_response), 400

        word = word.strip().upper()
        try:
            kind = puzzle_service.classify_strands_word(date, word)
        except UpstreamUnavailable as e:
            error_response = {
                'success': False,
                'error': str(e),
                'upstream_status': e.status
            }
            game_logger.log_server_response(request, 'classify_word', False, error_response, game)
            return jsonify(error_response), 502

        response_data = {
            'success': True,
            'kind': kind.value,
            'word': word
        }
        game_logger.log_server_response(request, 'classify_word', True, response_data, game)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'classify_word', game)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'classify_word', False, error_response, game)
        return jsonify(error_response), 500
