import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from timely.security.password import hash_password, verify_password
from timely.security.tokens import (
    JWTError,
    JWTSettings,
    SESSION_SUBJECT,
    SESSION_TYPE,
    create_session_token,
    decode_token,
)

logger = logging.getLogger(__name__)


class AuthError(Exception):
    pass


class AuthService:
    """
    Service d'authentification : un seul mot de passe configuré, une session signée en cookie.
    Ne connaît rien de HTTP ; les routes traduisent AuthError en 401.
    """

    def __init__(
        self,
        *,
        password: str,
        jwt_settings: JWTSettings,
        now_fn: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._hashed_password = hash_password(password)
        self.jwt = jwt_settings
        self.now_fn = now_fn

    # ---------- Login ----------
    def check_password(self, password: Optional[str]) -> bool:
        return bool(password) and verify_password(password, self._hashed_password)

    def log_in(self, password: Optional[str]) -> str:
        """Retourne un jeton de session si le mot de passe est bon."""
        if not self.check_password(password):
            logger.warning("Rejected login attempt")
            raise AuthError("Invalid password")
        logger.info("Session opened")
        return create_session_token(settings=self.jwt, now=self.now_fn())

    # ---------- Session ----------
    def validate_session(self, token: Optional[str]) -> None:
        if not token:
            raise AuthError("Missing session")
        try:
            decoded = decode_token(token, self.jwt)
        except JWTError:
            raise AuthError("Invalid session")

        if decoded.get("typ") != SESSION_TYPE or decoded.get("sub") != SESSION_SUBJECT:
            raise AuthError("Invalid session")

    def is_authenticated(self, *, token: Optional[str] = None, password: Optional[str] = None) -> bool:
        """Session valide en cookie, ou mot de passe passé directement (clients API)."""
        try:
            self.validate_session(token)
        except AuthError:
            return self.check_password(password)
        return True
