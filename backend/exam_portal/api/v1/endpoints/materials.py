"""
Materials API

Endpoints:
- GET    /materials               - List with filters and pagination
- POST   /materials               - Upload a file with metadata (faculty)
- GET    /materials/{id}          - Material details
- POST   /materials/{id}/like     - Toggle the caller's like
- POST   /materials/{id}/download - Count a download
- DELETE /materials/{id}          - Delete (faculty)
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from exam_portal.core.config import settings
from exam_portal.core.database import get_db
from exam_portal.core.exceptions import PayloadTooLargeError, UserNotFoundError, ValidationError
from exam_portal.core.logging_config import logger
from exam_portal.core.security import TokenClaims
from exam_portal.modules.auth.dependencies import get_current_claims, require_faculty
from exam_portal.schemas.material import (
    DownloadResponse,
    LikeToggleResponse,
    MaterialCreate,
    MaterialFilters,
    MaterialResponse,
    MessageResponse,
)
from exam_portal.services import material_service, user_service
from exam_portal.services.storage_service import LocalStorage, get_storage


router = APIRouter(prefix="/materials", tags=["Materials"])

UPLOAD_FORM_FIELDS = {"title", "description", "subject", "department", "semester", "type", "year", "file"}


def _validation_message(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error.get("loc", ()))
        parts.append(f"{field}: {error.get('msg')}" if field else error.get("msg", "invalid value"))
    return "; ".join(parts)


@router.get("", response_model=List[MaterialResponse])
async def list_materials(
    filters: Annotated[MaterialFilters, Query()],
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db),
):
    """List materials, newest first"""
    return await material_service.list_materials(db, filters)


@router.post("", response_model=MaterialResponse, status_code=status.HTTP_201_CREATED)
async def upload_material(
    request: Request,
    title: str = Form(""),
    subject: str = Form(""),
    department: str = Form(""),
    semester: str = Form(""),
    material_type: str = Form("", alias="type"),
    description: str = Form(""),
    year: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    claims: TokenClaims = Depends(require_faculty),
    db: AsyncSession = Depends(get_db),
    storage: LocalStorage = Depends(get_storage),
):
    """
    Upload a study material (faculty only).

    The metadata is validated and the size checked before anything is written
    to disk or to the database.
    """
    form = await request.form()
    unknown = sorted(set(form.keys()) - UPLOAD_FORM_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown form fields: {', '.join(unknown)}")

    if file is None or not file.filename:
        raise ValidationError("No file uploaded", field="file")

    try:
        data = MaterialCreate(
            title=title,
            description=description,
            subject=subject,
            department=department,
            semester=semester,
            type=material_type,
            year=year or None,
        )
    except PydanticValidationError as e:
        raise ValidationError(_validation_message(e))

    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise PayloadTooLargeError(settings.MAX_UPLOAD_SIZE)

    try:
        uploader = await user_service.get_user(db, claims.user_id)
        uploader_name = uploader.name
    except UserNotFoundError:
        uploader_name = None

    stored = await storage.save(file.filename, content)
    try:
        material = await material_service.create_material(
            db,
            data,
            file_url=stored.url,
            file_name=file.filename,
            uploaded_by=claims.user_id if uploader_name else None,
            uploaded_by_name=uploader_name,
        )
    except Exception:
        await storage.delete(stored.url)
        raise

    return material


@router.get("/{material_id}", response_model=MaterialResponse)
async def get_material(
    material_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db),
):
    return await material_service.get_material(db, material_id)


@router.post("/{material_id}/like", response_model=LikeToggleResponse)
async def toggle_like(
    material_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db),
):
    """Like the material, or remove the like if the caller already liked it"""
    result = await material_service.toggle_like(db, material_id, claims.user_id)
    return LikeToggleResponse(like_count=result.like_count, is_liked=result.is_liked)


@router.post("/{material_id}/download", response_model=DownloadResponse)
async def record_download(
    material_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db),
):
    downloads = await material_service.record_download(db, material_id)
    return DownloadResponse(downloads=downloads)


@router.delete("/{material_id}", response_model=MessageResponse)
async def delete_material(
    material_id: str,
    claims: TokenClaims = Depends(require_faculty),
    db: AsyncSession = Depends(get_db),
    storage: LocalStorage = Depends(get_storage),
):
    """Delete a material and its stored file (faculty only)"""
    material = await material_service.delete_material(db, material_id)
    if not await storage.delete(material.file_url):
        logger.warning(f"[Materials] No stored file removed for {material.file_url}")
    return MessageResponse(message="Material deleted successfully")
