from datetime import datetime, timedelta
from functools import lru_cache
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel
import bcrypt

from exam_portal.core.config import settings
from exam_portal.core.exceptions import InvalidTokenError


ACCESS_TOKEN_TYPE = "access"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password"""
    # Bcrypt has a 72 byte limit - truncate password if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    """Hash password with configurable rounds (BCRYPT_ROUNDS in .env)"""
    password_bytes = password.encode('utf-8')[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    return hashed.decode('utf-8')


class TokenClaims(BaseModel):
    """Identity carried inside an access token"""
    user_id: str
    role: str
    email: str


class TokenService:
    """
    Issues and verifies signed, self-expiring access tokens.

    There is no revocation list and no refresh flow: a token stays valid
    until its ``exp`` passes.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_days: int = 7):
        if not secret_key:
            raise ValueError("secret_key is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.default_ttl = timedelta(days=expire_days)

    def issue(self, claims: TokenClaims, ttl: Optional[timedelta] = None) -> str:
        """Create a JWT access token for the given identity"""
        expire = datetime.utcnow() + (ttl if ttl is not None else self.default_ttl)
        to_encode = {
            "sub": claims.user_id,
            "role": claims.role,
            "email": claims.email,
            "exp": expire,
            "type": ACCESS_TOKEN_TYPE,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token.

        Raises InvalidTokenError for a bad signature, a malformed or expired
        token, a non-access token or missing claims. The cause is not exposed.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise InvalidTokenError()

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            raise InvalidTokenError()

        user_id = payload.get("sub")
        role = payload.get("role")
        email = payload.get("email")
        if not user_id or not role or not email:
            raise InvalidTokenError()

        return TokenClaims(user_id=user_id, role=role, email=email)


@lru_cache()
def get_token_service() -> TokenService:
    """Process-wide TokenService built from settings (FastAPI dependency)"""
    return TokenService(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expire_days=settings.ACCESS_TOKEN_EXPIRE_DAYS,
    )
