"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. A token
carries {userId, username} plus iat/exp and an HMAC signature; nothing
is stored server-side. Tokens live for settings.token_expire_days
(default 7) and there is no refresh or revocation.

verify() never raises on whatever a client sends. It returns either
Claims or a TokenRejection for the access guard to branch on.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

import jwt
from jwt.utils import base64url_decode, base64url_encode

from voyagehub.config import Settings
from voyagehub.errors import ConfigurationError
from voyagehub.records import Claims, TokenRejection

_REQUIRED_CLAIMS = ["exp", "iat", "userId", "username"]


def _is_canonical(token: str) -> bool:
    """True if every segment is strict, unpadded base64url.

    The last character of a segment can carry unused bits that a lenient
    decoder ignores, so two different strings may decode to the same
    bytes. Re-encoding and comparing rejects every variant but one.
    """
    segments = token.split(".")
    if len(segments) != 3:
        return False
    for segment in segments:
        try:
            if base64url_encode(base64url_decode(segment)).decode("ascii") != segment:
                return False
        except ValueError:
            return False
    return True


class TokenService:
    """Issues and verifies signed, time-bounded bearer tokens."""

    def __init__(self, settings: Settings):
        if not settings.jwt_secret:
            raise ConfigurationError("A JWT signing secret must be configured")
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm
        self.lifetime = timedelta(days=settings.token_expire_days)

    def issue(
        self,
        user_id: uuid.UUID,
        username: str,
        now: Optional[datetime] = None,
    ) -> str:
        """Create a signed token for a user."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "userId": str(user_id),
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Union[Claims, TokenRejection]:
        """Decode and check a token.

        Returns Claims on success. Bad signature, expiry, malformed
        input and missing or ill-typed claims all come back as a
        TokenRejection.
        """
        if not isinstance(token, str) or not _is_canonical(token):
            return TokenRejection("malformed")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            return TokenRejection("expired")
        except jwt.InvalidTokenError as e:
            return TokenRejection(f"invalid: {type(e).__name__}")

        username = payload["username"]
        if not isinstance(username, str) or not username:
            return TokenRejection("invalid: username claim")
        try:
            user_id = uuid.UUID(str(payload["userId"]))
        except ValueError:
            return TokenRejection("invalid: userId claim")

        return Claims(user_id=user_id, username=username)
