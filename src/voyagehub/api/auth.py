"""Auth API — registration and login.

Learn: These routes are open (no access guard) because the caller has
no identity yet:
- POST /register → create a user account
- POST /login → email/password → bearer token + public user info
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from voyagehub.auth.dependencies import get_password_hasher, get_token_service
from voyagehub.auth.jwt import TokenService
from voyagehub.auth.password import PasswordHasher
from voyagehub.db.engine import get_db
from voyagehub.repositories.sql import SqlUserRepository
from voyagehub.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    UserSummary,
)
from voyagehub.services.user_service import UserService

router = APIRouter()


def get_user_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> UserService:
    return UserService(SqlUserRepository(db), hasher, tokens)


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(body: RegisterRequest, svc: UserService = Depends(get_user_service)):
    """Create a new user account."""
    await svc.register(body.username, body.email, body.password)
    return MessageResponse(message="User created successfully")


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, svc: UserService = Depends(get_user_service)):
    """Login with email and password → bearer token."""
    user, token = await svc.login(body.email, body.password)
    return LoginResponse(token=token, user=UserSummary.model_validate(user))
