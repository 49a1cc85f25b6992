# Third-party imports
from fastapi import APIRouter

# Local application imports
from consulta.api.internal.main import router as internal_router
from consulta.settings import settings

router = APIRouter(prefix=settings.API_PREFIX)

# Include internal API routers
router.include_router(internal_router)
