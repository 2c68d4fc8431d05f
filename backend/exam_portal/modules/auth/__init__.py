from exam_portal.modules.auth.dependencies import (
    get_current_claims,
    require_role,
    require_faculty,
)

__all__ = [
    "get_current_claims",
    "require_role",
    "require_faculty",
]
