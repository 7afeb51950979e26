"""
Authentication Service

Handles user registration, login, password hashing, and the JWT session
credential, using MongoDB for user storage.
"""

import bcrypt
import jwt
import datetime
from typing import Optional, Dict, Any
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from bson.objectid import ObjectId
from bson.errors import InvalidId

from ..models.user import User


class AuthService:
    """
    Authentication service for handling user registration, login, and token management.
    """

    def __init__(self, db: Database, jwt_secret: str, expiration_days: int = 7):
        """
        Initialize the authentication service.

        Args:
            db: MongoDB database holding the users collection
            jwt_secret: Secret key for JWT token generation
            expiration_days: Lifetime of issued tokens
        """
        self.jwt_secret = jwt_secret
        self.expiration_days = expiration_days
        self.users_collection = db.users

        # Create unique index on username
        self.users_collection.create_index("username", unique=True)

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt."""
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')

    def verify_password(self, password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return bcrypt.checkpw(password.encode('utf-8'), hashed_password.encode('utf-8'))

    def _issue_token(self, user: User) -> str:
        token_payload = {
            "user_id": user.id,
            "username": user.username,
            "exp": datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(days=self.expiration_days)
        }
        return jwt.encode(token_payload, self.jwt_secret, algorithm="HS256")

    def _to_user(self, doc: Dict[str, Any]) -> User:
        return User(
            id=str(doc["_id"]),
            username=doc["username"],
            created_at=doc.get("created_at"),
            last_login=doc.get("last_login"),
        )

    def register_user(self, username: str, password: str) -> Dict[str, Any]:
        """
        Register a new user.

        Returns:
            Dictionary with success status and message or error
        """
        if not username or not password:
            return {"success": False, "error": "Username and password are required"}

        if len(username.strip()) < 3:
            return {"success": False, "error": "Username must be at least 3 characters long"}

        if len(password) < 6:
            return {"success": False, "error": "Password must be at least 6 characters long"}

        username = username.strip().lower()  # Normalize username

        user_doc = {
            "username": username,
            "password": self.hash_password(password),
            "created_at": datetime.datetime.now(datetime.timezone.utc),
            "last_login": None,
        }

        try:
            result = self.users_collection.insert_one(user_doc)
        except DuplicateKeyError:
            return {"success": False, "error": "Username already exists"}
        except PyMongoError as e:
            return {"success": False, "error": f"Registration failed: {str(e)}"}

        return {
            "success": True,
            "message": "User registered successfully",
            "user_id": str(result.inserted_id)
        }

    def login_user(self, username: str, password: str) -> Dict[str, Any]:
        """
        Authenticate a user and generate JWT token.

        Returns:
            Dictionary with success status and JWT token or error
        """
        if not username or not password:
            return {"success": False, "error": "Username and password are required"}

        username = username.strip().lower()

        try:
            doc = self.users_collection.find_one({"username": username})
            if not doc or not self.verify_password(password, doc["password"]):
                return {"success": False, "error": "Invalid username or password"}

            self.users_collection.update_one(
                {"_id": doc["_id"]},
                {"$set": {"last_login": datetime.datetime.now(datetime.timezone.utc)}}
            )
        except PyMongoError as e:
            return {"success": False, "error": f"Login failed: {str(e)}"}

        user = self._to_user(doc)
        return {
            "success": True,
            "token": self._issue_token(user),
            "user": user.to_public_dict()
        }

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token.

        Returns:
            Dictionary with success status and user data or error
        """
        if not token:
            return {"success": False, "error": "Token is required"}

        try:
            payload = jwt.decode(token, self.jwt_secret, algorithms=["HS256"])
        except jwt.ExpiredSignatureError:
            return {"success": False, "error": "Token has expired"}
        except jwt.InvalidTokenError:
            return {"success": False, "error": "Invalid token"}

        user_id = payload.get("user_id")
        if not user_id:
            return {"success": False, "error": "Invalid token payload"}

        try:
            doc = self.users_collection.find_one({"_id": ObjectId(user_id)})
        except InvalidId:
            return {"success": False, "error": "Invalid token payload"}
        except PyMongoError as e:
            return {"success": False, "error": f"Token verification failed: {str(e)}"}

        if not doc:
            return {"success": False, "error": "User not found"}

        return {"success": True, "user": self._to_user(doc).to_public_dict()}


# Global service instance
_auth_service = None


def get_auth_service() -> Optional[AuthService]:
    """Get the global authentication service instance."""
    return _auth_service


def initialize_auth_service(db: Database, jwt_secret: str, expiration_days: int = 7) -> AuthService:
    """Initialize the global authentication service instance."""
    global _auth_service
    _auth_service = AuthService(db, jwt_secret, expiration_days)
    return _auth_service
