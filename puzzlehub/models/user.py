"""
User Data Models

Contains user-related data structures.
"""

from dataclasses import dataclass
from typing import Dict, Optional
from datetime import datetime


@dataclass
class User:
    """User data model."""
    id: str
    username: str
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    def to_public_dict(self) -> Dict[str, str]:
        return {'id': self.id, 'username': self.username}
