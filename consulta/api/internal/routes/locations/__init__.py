from .location_routes import router as location_router
from .sector_routes import router as sector_router

__all__ = ["location_router", "sector_router"]
