from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from exam_portal.core.exceptions import AuthenticationError, AuthorizationError
from exam_portal.core.logging_config import set_user_id
from exam_portal.core.security import TokenClaims, TokenService, get_token_service
from exam_portal.models.user import UserRole

# auto_error=False so a missing header becomes our 401 instead of FastAPI's default
security = HTTPBearer(auto_error=False)


async def get_current_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_service: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Authenticate the request from its bearer token.

    No database lookup happens here: downstream handlers get the decoded
    claims. The user id is attached to request.state for rate limiting and
    to the logging context.
    """
    if not credentials or not credentials.credentials:
        raise AuthenticationError("Access denied. No token provided.")

    claims = token_service.verify(credentials.credentials)

    request.state.user_id = claims.user_id
    request.state.claims = claims
    set_user_id(claims.user_id)
    return claims


def require_role(role: UserRole) -> Callable:
    """
    Build a dependency that only lets ``role`` through.

    It runs after get_current_claims and trusts the claims it produced.
    """

    async def role_checker(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if claims.role != role.value:
            raise AuthorizationError(f"Access denied. {role.value.capitalize()} only.")
        return claims

    return role_checker


require_faculty = require_role(UserRole.FACULTY)
