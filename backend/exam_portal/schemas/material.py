from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime

from exam_portal.models.material import MaterialType


class MaterialCreate(BaseModel):
    """Metadata sent alongside an uploaded file"""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=500)
    description: str = ""
    subject: str = Field(..., min_length=1, max_length=255)
    department: str = Field(..., min_length=1, max_length=255)
    semester: int = Field(..., ge=1)
    type: MaterialType
    year: Optional[int] = Field(None, ge=1900, le=2100)


class MaterialFilters(BaseModel):
    """
    Query parameters accepted by the material listing.

    Every field is optional; a missing field matches everything.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    department: Optional[str] = None
    semester: Optional[int] = Field(None, ge=1)
    type: Optional[MaterialType] = None
    subject: Optional[str] = None
    search: Optional[str] = None
    page: int = Field(1, ge=1)
    limit: int = Field(100, ge=1, le=500)

    @field_validator("department", "subject", "search", mode="after")
    @classmethod
    def empty_as_missing(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class MaterialResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    subject: str
    department: str
    semester: int
    type: MaterialType
    year: Optional[int] = None
    file_url: str
    file_name: str
    uploaded_by: Optional[str] = None
    uploaded_by_name: str
    likes: List[str] = Field(default_factory=list, validation_alias="liked_by")
    downloads: int
    created_at: datetime
    updated_at: Optional[datetime] = None


class LikeToggleResponse(BaseModel):
    like_count: int
    is_liked: bool


class DownloadResponse(BaseModel):
    downloads: int


class MessageResponse(BaseModel):
    message: str
