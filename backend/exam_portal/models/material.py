from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Integer, ForeignKey, Text
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from exam_portal.core.database import Base
from exam_portal.core.types import GUID, generate_uuid


class MaterialType(str, enum.Enum):
    """Kinds of study material"""
    NOTES = "notes"
    PYQ = "pyq"  # Previous year question paper
    SYLLABUS = "syllabus"
    REFERENCE = "reference"


class Material(Base):
    """Uploaded study material"""
    __tablename__ = "materials"

    id = Column(GUID, primary_key=True, default=generate_uuid)

    title = Column(String(500), nullable=False)
    description = Column(Text, default="", nullable=False)
    subject = Column(String(255), nullable=False, index=True)
    department = Column(String(255), nullable=False, index=True)
    semester = Column(Integer, nullable=False, index=True)
    type = Column(SQLEnum(MaterialType), nullable=False, index=True)
    year = Column(Integer, nullable=True)

    # File details
    file_url = Column(Text, nullable=False)
    file_name = Column(String(500), nullable=False)

    uploaded_by = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    uploaded_by_name = Column(String(255), default="Faculty", nullable=False)

    downloads = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    uploader = relationship("User", back_populates="materials")
    likes = relationship(
        "MaterialLike",
        back_populates="material",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    @property
    def liked_by(self):
        """User ids that currently like this material"""
        return [like.user_id for like in self.likes]

    def __repr__(self):
        return f"<Material {self.title}>"


class MaterialLike(Base):
    """One user's like on one material; the composite key keeps likes unique"""
    __tablename__ = "material_likes"

    material_id = Column(GUID, ForeignKey("materials.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    material = relationship("Material", back_populates="likes")
    user = relationship("User", back_populates="likes")
