from .image_routes import router as image_router

__all__ = ["image_router"]
