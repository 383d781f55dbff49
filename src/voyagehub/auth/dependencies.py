"""FastAPI auth dependencies — the access guard for journal routes.

Learn: get_current_user is used as Depends() on the journals router
(and again in handlers that need the identity; FastAPI caches it per
request, so the token is verified once).

  no/unknown Authorization header  -> MissingToken  (401)
  token fails verification         -> InvalidToken  (403)
  token ok                         -> Claims, also on request.state.claims
"""

from typing import Optional

import structlog
from fastapi import Header, Request

from voyagehub.auth.jwt import TokenService
from voyagehub.auth.password import PasswordHasher
from voyagehub.errors import InvalidToken, MissingToken
from voyagehub.records import Claims, TokenRejection

logger = structlog.get_logger()


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def _extract_bearer(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of "Bearer <token>", or None."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> Claims:
    """Authenticate the request or raise MissingToken/InvalidToken."""
    token = _extract_bearer(authorization)
    if token is None:
        raise MissingToken()

    result = get_token_service(request).verify(token)
    if isinstance(result, TokenRejection):
        logger.info("voyagehub.auth.token_rejected", reason=result.reason)
        raise InvalidToken()

    request.state.claims = result
    structlog.contextvars.bind_contextvars(user_id=str(result.user_id))
    return result
