from fastapi import APIRouter
from exam_portal.api.v1.endpoints import auth, chat, dashboard, health, materials

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(materials.router)
api_router.include_router(chat.router)
api_router.include_router(dashboard.router)
