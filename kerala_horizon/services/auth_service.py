"""
Auth Service - registration, login and bearer tokens.

Passwords are stored as bcrypt hashes. Tokens are HS256 JWTs carrying a
``jti`` so that logout can revoke them.
"""
import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from ..config import settings
from ..core.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from ..core.validation import RULES, FormValidator, validate_registration
from ..models.user import ProfileUpdateRequest, RegisterRequest, UserPreferences, UserProfile
from .store import Database, db

logger = logging.getLogger(__name__)


class AuthService:
    """Manages users and the tokens issued to them."""

    def __init__(self, database: Database = db):
        self.users = database.collection("users")
        self._revoked: set[str] = set()
        self._lock = threading.Lock()

    # -- passwords --------------------------------------------------------

    @staticmethod
    def hash_password(password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    @staticmethod
    def verify_password(password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            return False

    # -- tokens -----------------------------------------------------------

    def create_token(self, user: UserProfile) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "uid": user.uid,
            "email": user.email,
            "name": user.name,
            "role": "traveller",
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + timedelta(hours=settings.jwt_expiry_hours),
        }
        return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    def decode_token(self, token: str) -> dict:
        """Return the claims of a valid, unrevoked token."""
        try:
            claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        except jwt.PyJWTError as e:
            logger.info(f"Token rejected: {e}")
            raise AuthenticationError("Invalid authentication token") from e
        with self._lock:
            if claims.get("jti") in self._revoked:
                raise AuthenticationError("Invalid authentication token")
        return claims

    def revoke_token(self, claims: dict):
        with self._lock:
            self._revoked.add(claims["jti"])

    def clear_revocations(self):
        with self._lock:
            self._revoked.clear()

    # -- users ------------------------------------------------------------

    def find_by_email(self, email: str) -> Optional[UserProfile]:
        matches = self.users.where(email=email.strip().lower())
        return matches[0] if matches else None

    def get_user(self, uid: str) -> UserProfile:
        user = self.users.get(uid)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def register(self, request: RegisterRequest) -> tuple[UserProfile, str]:
        errors = validate_registration(request.model_dump())
        if errors:
            raise ValidationError("Validation error", details=errors)
        if self.find_by_email(request.email):
            raise ConflictError("Email already registered")

        user = UserProfile(
            email=request.email.strip().lower(),
            name=request.name.strip(),
            phone=request.phone or None,
            password_hash=self.hash_password(request.password),
            preferences=request.preferences or UserPreferences(),
        )
        self.users.add(user.uid, user)
        logger.info(f"Registered user {user.uid}")
        return user, self.create_token(user)

    def login(self, email: str, password: str) -> tuple[UserProfile, str]:
        user = self.find_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        if not self.verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        user = self.users.update(user.uid, last_login_at=datetime.now())
        return user, self.create_token(user)

    def update_profile(self, uid: str, request: ProfileUpdateRequest) -> UserProfile:
        self.get_user(uid)
        updates = request.model_dump(exclude_none=True)

        rules = {}
        if "name" in updates:
            rules["name"] = RULES["name"]
        if "phone" in updates:
            rules["phone"] = RULES["phone"]
        errors = FormValidator.validate_form(updates, rules)
        if errors:
            raise ValidationError("Validation error", details=errors)

        return self.users.update(uid, **updates, updated_at=datetime.now())

    def update_preferences(self, uid: str, preferences: UserPreferences) -> UserProfile:
        self.get_user(uid)
        return self.users.update(uid, preferences=preferences, updated_at=datetime.now())

    def request_password_reset(self, email: str):
        """Send a reset link if the account exists; the caller never learns which."""
        if self.find_by_email(email):
            logger.info("Password reset requested for a registered account")


# Global auth service
auth_service = AuthService()


def get_auth_service() -> AuthService:
    return auth_service
