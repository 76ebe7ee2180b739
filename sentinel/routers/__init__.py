from sentinel.routers.admin import router as admin_router
from sentinel.routers.alerts import router as alerts_router
from sentinel.routers.assets import router as assets_router
from sentinel.routers.health import router as health_router
from sentinel.routers.risks import router as risks_router

__all__ = [
    "admin_router",
    "alerts_router",
    "assets_router",
    "health_router",
    "risks_router",
]
