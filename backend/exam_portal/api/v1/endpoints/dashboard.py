"""
Dashboard endpoints - portal-wide counts and the newest uploads.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from exam_portal.core.database import get_db
from exam_portal.core.security import TokenClaims
from exam_portal.modules.auth.dependencies import get_current_claims
from exam_portal.schemas.dashboard import DashboardResponse, DashboardStats
from exam_portal.services import dashboard_service

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db),
):
    return await dashboard_service.get_dashboard(db)


@router.get("/stats", response_model=DashboardStats)
async def get_stats(
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db),
):
    return await dashboard_service.get_stats(db)
