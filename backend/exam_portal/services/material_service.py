"""
Material store operations: create, read, list, like toggle, download count, delete.

Likes and downloads are mutated with single SQL statements so concurrent
requests on the same material do not lose updates:
- a like is a row in material_likes keyed by (material_id, user_id)
- a download is ``UPDATE materials SET downloads = downloads + 1``
"""

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from exam_portal.core.exceptions import MaterialNotFoundError, UserNotFoundError
from exam_portal.core.logging_config import logger
from exam_portal.models.material import Material, MaterialLike
from exam_portal.schemas.material import MaterialCreate, MaterialFilters
from exam_portal.services.material_query import build_material_query


@dataclass
class LikeToggleResult:
    like_count: int
    is_liked: bool


async def create_material(
    db: AsyncSession,
    data: MaterialCreate,
    file_url: str,
    file_name: str,
    uploaded_by: Optional[str],
    uploaded_by_name: Optional[str] = None,
) -> Material:
    material = Material(
        title=data.title,
        description=data.description or "",
        subject=data.subject,
        department=data.department,
        semester=data.semester,
        type=data.type,
        year=data.year,
        file_url=file_url,
        file_name=file_name,
        uploaded_by=uploaded_by,
        uploaded_by_name=uploaded_by_name or "Faculty",
        downloads=0,
        likes=[],
    )
    db.add(material)
    await db.commit()

    logger.info(f"[Materials] Uploaded '{material.title}' ({material.type.value}) by {material.uploaded_by_name}")
    return material


async def get_material(db: AsyncSession, material_id: str) -> Material:
    result = await db.execute(select(Material).where(Material.id == material_id))
    material = result.scalar_one_or_none()
    if not material:
        raise MaterialNotFoundError(material_id)
    return material


async def list_materials(db: AsyncSession, filters: MaterialFilters) -> List[Material]:
    result = await db.execute(build_material_query(filters))
    return list(result.scalars().all())


async def _ensure_exists(db: AsyncSession, material_id: str) -> None:
    exists = await db.scalar(select(Material.id).where(Material.id == material_id))
    if not exists:
        raise MaterialNotFoundError(material_id)


async def _like_count(db: AsyncSession, material_id: str) -> int:
    count = await db.scalar(
        select(func.count()).select_from(MaterialLike).where(MaterialLike.material_id == material_id)
    )
    return count or 0


async def toggle_like(db: AsyncSession, material_id: str, user_id: str) -> LikeToggleResult:
    """
    Flip this user's like on the material.

    Calling it twice in a row restores the original state.
    """
    await _ensure_exists(db, material_id)

    removed = await db.execute(
        delete(MaterialLike).where(
            MaterialLike.material_id == material_id,
            MaterialLike.user_id == user_id,
        )
    )

    if removed.rowcount:
        is_liked = False
        await db.commit()
    else:
        try:
            await db.execute(insert(MaterialLike).values(material_id=material_id, user_id=user_id))
            await db.commit()
        except IntegrityError:
            await db.rollback()
            # Row present: a concurrent like won. Absent: the user row is gone
            liked = await db.scalar(
                select(MaterialLike.user_id).where(
                    MaterialLike.material_id == material_id,
                    MaterialLike.user_id == user_id,
                )
            )
            if not liked:
                await _ensure_exists(db, material_id)
                raise UserNotFoundError(user_id)
        is_liked = True

    return LikeToggleResult(like_count=await _like_count(db, material_id), is_liked=is_liked)


async def record_download(db: AsyncSession, material_id: str) -> int:
    """Increment the download counter by one and return the new value"""
    result = await db.execute(
        update(Material)
        .where(Material.id == material_id)
        .values(downloads=Material.downloads + 1)
        .execution_options(synchronize_session=False)
    )
    if not result.rowcount:
        await db.rollback()
        raise MaterialNotFoundError(material_id)
    await db.commit()

    downloads = await db.scalar(select(Material.downloads).where(Material.id == material_id))
    return downloads or 0


async def delete_material(db: AsyncSession, material_id: str) -> Material:
    """Delete the material (and its likes) and return the removed row"""
    material = await get_material(db, material_id)
    await db.delete(material)
    await db.commit()

    logger.info(f"[Materials] Deleted '{material.title}' ({material_id})")
    return material
