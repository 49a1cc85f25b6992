from .consultation_routes import router as consultation_router

__all__ = ["consultation_router"]
