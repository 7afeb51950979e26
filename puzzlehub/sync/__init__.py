"""
Sync Package

Offline-first persistence policy between the sessions, the local store
and the remote result service.
"""

from .auth_state import AuthState, AuthStatus
from .coordinator import FlushReport, RemoteResultService, SaveOutcome, SyncCoordinator
from .flush import FlushResult, flush

__all__ = [
    'AuthState', 'AuthStatus', 'FlushReport', 'RemoteResultService', 'SaveOutcome',
    'SyncCoordinator', 'FlushResult', 'flush'
]
