"""
Dashboard and statistics, recomputed from the stores on every call.
"""

from typing import List

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from exam_portal.core.exceptions import InternalFailureError
from exam_portal.core.logging_config import logger
from exam_portal.models.material import Material, MaterialType
from exam_portal.models.user import User, UserRole
from exam_portal.schemas.dashboard import DashboardResponse, DashboardStats, RecentMaterial


RECENT_MATERIALS_LIMIT = 5


async def _compute_stats(db: AsyncSession) -> DashboardStats:
    total_materials = await db.scalar(select(func.count(Material.id)))
    total_pyqs = await db.scalar(
        select(func.count(Material.id)).where(Material.type == MaterialType.PYQ)
    )
    total_downloads = await db.scalar(select(func.coalesce(func.sum(Material.downloads), 0)))
    total_students = await db.scalar(
        select(func.count(User.id)).where(User.role == UserRole.STUDENT)
    )
    total_faculty = await db.scalar(
        select(func.count(User.id)).where(User.role == UserRole.FACULTY)
    )

    return DashboardStats(
        total_materials=total_materials or 0,
        total_pyqs=total_pyqs or 0,
        total_downloads=total_downloads or 0,
        total_students=total_students or 0,
        total_faculty=total_faculty or 0,
    )


async def get_stats(db: AsyncSession) -> DashboardStats:
    try:
        return await _compute_stats(db)
    except SQLAlchemyError as e:
        logger.log_error_with_context(e, context="dashboard.stats")
        raise InternalFailureError() from e


async def get_dashboard(db: AsyncSession) -> DashboardResponse:
    """Stats plus the newest materials"""
    try:
        stats = await _compute_stats(db)
        result = await db.execute(
            select(Material.id, Material.title, Material.subject, Material.type, Material.created_at)
            .order_by(Material.created_at.desc())
            .limit(RECENT_MATERIALS_LIMIT)
        )
        rows = result.all()
    except SQLAlchemyError as e:
        logger.log_error_with_context(e, context="dashboard.load")
        raise InternalFailureError() from e

    recent: List[RecentMaterial] = [
        RecentMaterial(id=row.id, title=row.title, subject=row.subject, type=row.type, created_at=row.created_at)
        for row in rows
    ]
    return DashboardResponse(stats=stats, recent_materials=recent)
