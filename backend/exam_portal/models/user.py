from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Integer
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from exam_portal.core.database import Base
from exam_portal.core.types import GUID, generate_uuid


DEFAULT_DEPARTMENT = "Computer Science"


class UserRole(str, enum.Enum):
    """User roles"""
    STUDENT = "student"
    FACULTY = "faculty"


class User(Base):
    """Registered portal user"""
    __tablename__ = "users"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    role = Column(SQLEnum(UserRole), default=UserRole.STUDENT, nullable=False)
    department = Column(String(255), default=DEFAULT_DEPARTMENT, nullable=False)
    semester = Column(Integer, default=1, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Deleting a user orphans their uploads (uploaded_by -> NULL) and removes
    # their likes and chat history.
    materials = relationship("Material", back_populates="uploader", passive_deletes="all")
    likes = relationship("MaterialLike", back_populates="user", passive_deletes="all")
    chat_entries = relationship("ChatEntry", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<User {self.email}>"
