from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from exam_portal.core.database import get_db
from exam_portal.core.exceptions import DuplicateResourceError, InvalidCredentialsError
from exam_portal.core.logging_config import logger
from exam_portal.core.rate_limiter import auth_rate_limit, strict_rate_limit
from exam_portal.core.security import TokenClaims, TokenService, get_token_service
from exam_portal.models.user import User
from exam_portal.modules.auth.dependencies import get_current_claims
from exam_portal.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from exam_portal.services import user_service


router = APIRouter(prefix="/auth", tags=["Authentication"])


def _auth_response(user: User, token_service: TokenService) -> AuthResponse:
    token = token_service.issue(
        TokenClaims(user_id=str(user.id), role=user.role.value, email=user.email)
    )
    return AuthResponse(access_token=token, user=UserResponse.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@strict_rate_limit()
async def register(
    request: Request,
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    """Register a new student or faculty account and sign it in"""
    client_ip = request.client.host if request.client else "unknown"

    try:
        user = await user_service.create_user(db, user_data)
    except DuplicateResourceError as e:
        logger.log_auth_event(
            event="register",
            success=False,
            user_email=user_data.email,
            reason=e.message,
            client_ip=client_ip,
        )
        raise

    logger.log_auth_event(
        event="register",
        success=True,
        user_email=user.email,
        client_ip=client_ip,
        user_role=user.role.value,
    )
    return _auth_response(user, token_service)


@router.post("/login", response_model=AuthResponse)
@auth_rate_limit()
async def login(
    request: Request,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    """Exchange email and password for an access token"""
    client_ip = request.client.host if request.client else "unknown"

    try:
        user = await user_service.authenticate(db, credentials.email, credentials.password)
    except InvalidCredentialsError:
        logger.log_auth_event(
            event="login",
            success=False,
            user_email=credentials.email,
            reason="Invalid email or password",
            client_ip=client_ip,
        )
        raise

    logger.log_auth_event(event="login", success=True, user_email=user.email, client_ip=client_ip)
    return _auth_response(user, token_service)


@router.get("/me", response_model=UserResponse)
async def get_me(
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db),
):
    """Current user's profile; 404 if the account no longer exists"""
    return await user_service.get_user(db, claims.user_id)
