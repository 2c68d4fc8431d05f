# Re-export all models for convenient imports
from exam_portal.models.user import User, UserRole
from exam_portal.models.material import Material, MaterialLike, MaterialType
from exam_portal.models.chat import ChatEntry

__all__ = [
    # User
    "User",
    "UserRole",
    # Materials
    "Material",
    "MaterialLike",
    "MaterialType",
    # Chat
    "ChatEntry",
]
