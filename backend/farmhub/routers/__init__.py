from farmhub.routers.farms import router as farms_router
from farmhub.routers.crops import router as crops_router
from farmhub.routers.tasks import router as tasks_router
from farmhub.routers.transactions import router as transactions_router
from farmhub.routers.projects import router as projects_router
from farmhub.routers.comments import router as comments_router
from farmhub.routers.weather import router as weather_router
from farmhub.routers.dashboard import router as dashboard_router
from farmhub.routers.audit import router as audit_router

__all__ = [
    "farms_router", "crops_router", "tasks_router", "transactions_router",
    "projects_router", "comments_router", "weather_router", "dashboard_router", "audit_router",
]
