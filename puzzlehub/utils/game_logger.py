"""
Game Logger Module for the Puzzle Hub

This module provides structured logging for user actions, server responses,
game results and the client sync layer (progress saves, queue flushes,
discarded local records).
"""

import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from ..config.app_config import Config


class GameLogger:
    """
    Centralized logging system for the puzzle hub.

    Features:
    - User action tracking with IP/user identification
    - Server response logging
    - Game result logging (wins, losses) for every game kind
    - Sync layer logging (flush counts, best-effort write failures)
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
        if not isinstance(self.level, int):
            self.level = logging.INFO

        # Setup main game logger
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Setup the main game logger with file handler."""
        logger = logging.getLogger('puzzlehub')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            logger.handlers.clear()

        # Create log file with date
        log_file = self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

        # File handler for detailed logs
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(self.level)

        # Console handler for only important messages (WARNING and above)
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)

        file_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_formatter = logging.Formatter(
            '%(levelname)s: %(message)s'
        )

        file_handler.setFormatter(file_formatter)
        console_handler.setFormatter(console_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    def _get_user_identity(self, request) -> Dict[str, Optional[str]]:
        """Extract user identity information from request."""
        from .helpers import get_user_identity
        return get_user_identity(request)

    def _create_log_entry(self,
                          event_type: str,
                          action: str,
                          user_info: Dict[str, Optional[str]],
                          details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user_info,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_user_action(self,
                        request,
                        action: str,
                        game: Optional[str] = None,
                        **kwargs):
        """
        Log user actions with full context.

        Args:
            request: Flask request object
            action: Type of action (e.g., 'save_progress', 'record_win', 'login')
            game: Game kind if applicable
            **kwargs: Additional details to log
        """
        user_info = self._get_user_identity(request)

        details = {
            'game': game,
            'endpoint': request.endpoint,
            'method': request.method,
            'url': request.url,
            **kwargs
        }

        log_message = self._create_log_entry('USER_ACTION', action, user_info, details)
        self.logger.info(log_message)

    def log_server_response(self,
                            request,
                            action: str,
                            success: bool,
                            response_data: Dict[str, Any],
                            game: Optional[str] = None,
                            **kwargs):
        """
        Log server responses with full context.

        Args:
            request: Flask request object
            action: Action that was performed
            success: Whether the action succeeded
            response_data: Data being returned to client
            game: Game kind if applicable
            **kwargs: Additional details to log
        """
        user_info = self._get_user_identity(request)

        details = {
            'game': game,
            'success': success,
            'response_size': len(str(response_data)),
            'response_data': self._sanitize_response_data(response_data),
            **kwargs
        }

        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        log_message = self._create_log_entry(event_type, action, user_info, details)

        if success:
            self.logger.info(log_message)
        else:
            self.logger.error(log_message)

    def log_game_event(self,
                       game: str,
                       event: str,
                       user_id: Optional[str] = None,
                       **kwargs):
        """
        Log game results (wins, losses, queued results).

        Args:
            game: Game kind
            event: Type of game event (e.g., 'game_won', 'game_lost', 'result_queued')
            user_id: Authenticated user, None for anonymous players
            **kwargs: Additional game details
        """
        user_info = {'user_ip': None, 'user_id': user_id, 'username': None}
        log_message = self._create_log_entry('GAME_EVENT', event, user_info, {'game': game, **kwargs})
        self.logger.info(log_message)

    def log_sync_event(self,
                       action: str,
                       success: bool = True,
                       **kwargs):
        """
        Log client sync layer activity.

        Failures are logged at WARNING: they are retried later, never fatal.
        """
        user_info = {'user_ip': None, 'user_id': kwargs.pop('user_id', None), 'username': None}
        log_message = self._create_log_entry('SYNC', action, user_info, {'success': success, **kwargs})

        if success:
            self.logger.info(log_message)
        else:
            self.logger.warning(log_message)

    def log_error(self,
                  request,
                  error: Exception,
                  action: str,
                  game: Optional[str] = None):
        """
        Log errors with full context.

        Args:
            request: Flask request object
            error: Exception that occurred
            action: Action that was being performed
            game: Game kind if applicable
        """
        user_info = self._get_user_identity(request)

        details = {
            'game': game,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'action': action
        }

        log_message = self._create_log_entry('ERROR', action, user_info, details)
        self.logger.error(log_message)

    def _sanitize_response_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Remove or mask sensitive data from response logs."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        sanitized = data.copy()
        if 'token' in sanitized:
            sanitized['token'] = '***'

        # Keep puzzle payloads out of the log, only their shape
        if 'puzzle' in sanitized and isinstance(sanitized['puzzle'], dict):
            sanitized['puzzle'] = {'keys': sorted(sanitized['puzzle'].keys())}

        return sanitized


# Global logger instance
game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
