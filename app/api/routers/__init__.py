"""
app/api/routers package marker.
"""

from app.api.routers.dashboard_router import router as dashboard_router
from app.api.routers.export_router import router as export_router

__all__ = [
    "dashboard_router",
    "export_router",
]
