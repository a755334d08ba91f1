"""
Session Token Service
HS256 JWTs carrying the session payload, read from a Bearer header or the session cookie
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError
from loguru import logger
from starlette.requests import HTTPConnection

from core.config import settings
from core.exceptions import AuthenticationException


SESSION_COOKIE = "session"


class SessionTokenService:
    """Signs and verifies session tokens"""

    def __init__(self, secret_key: Optional[str] = None, max_age_days: Optional[int] = None):
        self.secret_key = secret_key or settings.JWT_SECRET
        self.algorithm = settings.JWT_ALGORITHM
        self.max_age = timedelta(days=max_age_days or settings.SESSION_MAX_AGE_DAYS)

        if self.secret_key == "fallback-secret-key":
            logger.warning("JWT_SECRET not set; using the development fallback key")

    def encrypt(self, payload: Dict[str, Any]) -> str:
        """Sign a payload, adding issued-at and expiry claims"""
        now = datetime.now(timezone.utc)
        claims = dict(payload)
        claims.update({"iat": now, "exp": now + self.max_age})
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def decrypt(self, token: str) -> Dict[str, Any]:
        """Verify and decode token"""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning(f"JWT verification failed: {str(e)}")
            raise AuthenticationException("Invalid or expired token")

    def get_user_from_request(self, request: HTTPConnection) -> Optional[Dict[str, Any]]:
        """Session payload from 'Authorization: Bearer' or the session cookie, else None"""
        authorization = request.headers.get("authorization")
        token = authorization.replace("Bearer ", "") if authorization else request.cookies.get(SESSION_COOKIE)

        if not token:
            return None

        try:
            return self.decrypt(token)
        except AuthenticationException:
            return None
