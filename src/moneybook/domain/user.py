"""User registration and bearer-token credential store."""

import hashlib
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt

from moneybook.database.base import Database
from moneybook.domain.category import clean_name
from moneybook.domain.entities import User as UserEntity
from moneybook.domain.errors import (
    AuthenticationError,
    ConflictError,
    MissingFieldsError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
# bcrypt only reads the first 72 bytes
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password with bcrypt and a fresh salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, stored: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), stored.encode("utf-8"))
    except ValueError:
        # Not a bcrypt hash, or a password bcrypt cannot take
        return False


def hash_token(token: str) -> str:
    """Return the sha256 hex digest under which a bearer token is stored."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _utcnow() -> datetime:
    # Stored naive, interpreted as UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class IssuedToken:
    """A freshly issued bearer token; the plain token is never stored."""

    token: str
    user: UserEntity
    expires_at: Optional[datetime]


class UserService:
    """Service for registering users and resolving bearer tokens."""

    def __init__(self, db: Database, token_ttl_minutes: int = 1440):
        """Initialize user service.

        Args:
            db: Database instance
            token_ttl_minutes: Lifetime of issued tokens; 0 means no expiry
        """
        self.db = db
        self.token_ttl_minutes = token_ttl_minutes

    def register(self, login: Any, password: Any) -> UserEntity:
        """Register a new user.

        Raises:
            MissingFieldsError: If login or password is missing
            ValidationError: If the password is too short
            ConflictError: If the login is already taken
        """
        missing = []
        try:
            login = clean_name(login, "login")
        except MissingFieldsError:
            missing.append("login")
        if not password:
            missing.append("password")
        if missing:
            raise MissingFieldsError(missing)
        if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be a string of at least {MIN_PASSWORD_LENGTH} characters"
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")

        if self.db.get_user_by_login(login) is not None:
            raise ConflictError(f"Login '{login}' is already taken")

        user_id = self.db.create_user(login=login, password_hash=hash_password(password))
        logger.info("Registered user %s (%s)", user_id, login)
        return self._fetch(user_id)

    def login(self, login: Any, password: Any) -> IssuedToken:
        """Check credentials and issue a new bearer token.

        Issuing a token replaces the previous one.

        Raises:
            AuthenticationError: If the login is unknown or the password is wrong
        """
        user = self.db.get_user_by_login(login.strip()) if isinstance(login, str) else None
        stored = self.db.get_password_hash(user.id) if user is not None else None
        if (
            user is None
            or stored is None
            or not isinstance(password, str)
            or not verify_password(password, stored)
        ):
            logger.info("Failed login for %r", login)
            raise AuthenticationError("Invalid login or password")

        return self.issue_token(user.id)

    def issue_token(self, user_id: int) -> IssuedToken:
        """Issue a new bearer token for a user.

        Raises:
            NotFoundError: If the user does not exist
        """
        token = secrets.token_urlsafe(32)
        expires_at = None
        if self.token_ttl_minutes > 0:
            expires_at = _utcnow() + timedelta(minutes=self.token_ttl_minutes)

        if self.db.set_user_token(user_id, hash_token(token), expires_at) == 0:
            raise NotFoundError(f"User {user_id} not found")
        return IssuedToken(token=token, user=self._fetch(user_id), expires_at=expires_at)

    def authenticate(self, token: str) -> UserEntity:
        """Resolve a bearer token to its user.

        Raises:
            AuthenticationError: If the token is unknown or expired
        """
        if not token:
            raise AuthenticationError("Missing bearer token")

        user = self.db.get_user_by_token_hash(hash_token(token))
        if user is None:
            logger.info("Rejected unknown bearer token")
            raise AuthenticationError("Invalid or expired token")

        expires_at = user.token_expires_at
        if expires_at is not None:
            if expires_at.tzinfo is not None:
                expires_at = expires_at.astimezone(timezone.utc).replace(tzinfo=None)
            if expires_at <= _utcnow():
                logger.info("Rejected expired token of user %s", user.id)
                raise AuthenticationError("Invalid or expired token")
        return user

    def get_user(self, user_id: int) -> UserEntity:
        """Get user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        return self._fetch(user_id)

    def get_user_by_login(self, login: str) -> UserEntity:
        """Get user by login.

        Raises:
            NotFoundError: If no user has this login
        """
        user = self.db.get_user_by_login(login)
        if user is None:
            raise NotFoundError(f"User '{login}' not found")
        return user

    def _fetch(self, user_id: int) -> UserEntity:
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user
