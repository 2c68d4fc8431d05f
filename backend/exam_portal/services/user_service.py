from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from exam_portal.core.exceptions import (
    DuplicateResourceError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from exam_portal.core.logging_config import logger
from exam_portal.core.security import get_password_hash, verify_password
from exam_portal.models.user import User
from exam_portal.schemas.auth import UserRegister


DUPLICATE_EMAIL_MESSAGE = "User already exists with this email"


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def get_user(db: AsyncSession, user_id: str) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise UserNotFoundError(user_id)
    return user


async def create_user(db: AsyncSession, data: UserRegister) -> User:
    """
    Register a new user.

    The email is checked up front for a friendly error; the unique index on
    users.email still decides when two registrations race.
    """
    if await get_user_by_email(db, data.email):
        raise DuplicateResourceError(DUPLICATE_EMAIL_MESSAGE, field="email")

    user = User(
        name=data.name,
        email=data.email,
        hashed_password=get_password_hash(data.password),
        role=data.role,
        department=data.department,
        semester=data.semester,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateResourceError(DUPLICATE_EMAIL_MESSAGE, field="email")

    logger.info(f"[Users] Registered {user.email} as {user.role.value}")
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    """Return the user for a matching email/password pair"""
    user = await get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        raise InvalidCredentialsError()
    return user
