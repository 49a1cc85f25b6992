from .dashboard_routes import router as dashboard_router
from .export_routes import router as export_router

__all__ = ["dashboard_router", "export_router"]
