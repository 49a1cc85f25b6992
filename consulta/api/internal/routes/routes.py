# Third-party imports
from fastapi import APIRouter

# Local application imports
from consulta.api.internal.routes.auth import auth_router, user_router
from consulta.api.internal.routes.consultations import consultation_router
from consulta.api.internal.routes.dashboard import dashboard_router, export_router
from consulta.api.internal.routes.locations import location_router, sector_router
from consulta.api.internal.routes.uploads import image_router

router = APIRouter()

# Include all internal routers
router.include_router(auth_router)
router.include_router(user_router)
router.include_router(location_router)
router.include_router(sector_router)
router.include_router(consultation_router)
router.include_router(image_router)
router.include_router(dashboard_router)
router.include_router(export_router)
