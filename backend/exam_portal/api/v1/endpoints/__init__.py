# API endpoints
from . import auth, chat, dashboard, health, materials

__all__ = ["auth", "chat", "dashboard", "health", "materials"]
