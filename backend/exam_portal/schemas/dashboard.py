from pydantic import BaseModel, ConfigDict
from typing import List
from datetime import datetime

from exam_portal.models.material import MaterialType


class DashboardStats(BaseModel):
    total_materials: int = 0
    total_pyqs: int = 0
    total_downloads: int = 0
    total_students: int = 0
    total_faculty: int = 0


class RecentMaterial(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    subject: str
    type: MaterialType
    created_at: datetime


class DashboardResponse(BaseModel):
    stats: DashboardStats
    recent_materials: List[RecentMaterial]
