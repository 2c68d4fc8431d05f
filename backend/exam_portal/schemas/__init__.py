from exam_portal.schemas.auth import UserRegister, UserLogin, UserResponse, AuthResponse
from exam_portal.schemas.material import (
    MaterialCreate,
    MaterialFilters,
    MaterialResponse,
    LikeToggleResponse,
    DownloadResponse,
    MessageResponse,
)
from exam_portal.schemas.chat import ChatRequest, ChatReply, ChatEntryResponse
from exam_portal.schemas.dashboard import DashboardStats, RecentMaterial, DashboardResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "MaterialCreate",
    "MaterialFilters",
    "MaterialResponse",
    "LikeToggleResponse",
    "DownloadResponse",
    "MessageResponse",
    "ChatRequest",
    "ChatReply",
    "ChatEntryResponse",
    "DashboardStats",
    "RecentMaterial",
    "DashboardResponse",
]
