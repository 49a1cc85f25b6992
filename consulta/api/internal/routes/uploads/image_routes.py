# Third-party imports
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import FileResponse
from pydantic import Field

# Local application imports
from consulta.core.monitoring.logging import get_request_logger
from consulta.dependancies.common import get_client_identifier, get_image_storage, get_upload_rate_limiter
from consulta.schemas.common import CamelModel
from consulta.services.auth.rate_limit_services import RateLimiter
from consulta.services.storage.image_storage import ImageStorageService, ImageValidationError
from consulta.settings import settings
from consulta.utils.validators.file_validator import normalize_file_name

router = APIRouter(tags=["Uploads"])

IMAGE_CACHE_CONTROL = "public, max-age=31536000, immutable"


class ImageUploadResponse(CamelModel):
    success: bool = True
    image_urls: list[str] = Field(default_factory=list)


@router.post("/upload-images", response_model=ImageUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_images(
    request: Request,
    images: list[UploadFile] = File(...),
    limiter: RateLimiter = Depends(get_upload_rate_limiter),
    storage: ImageStorageService = Depends(get_image_storage),
):
    """
    Upload up to three consultation images.

    Every file is re-encoded as JPEG. The returned URLs are meant to be sent
    back in the `images` field of a consultation.
    """
    client_id = get_client_identifier(request)
    logger = get_request_logger(__name__, request, client=client_id)

    limit_status = await limiter.check(client_id)
    if not limit_status.allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Demasiadas subidas de imágenes. Intente de nuevo más tarde.",
            headers={"Retry-After": str(limit_status.retry_after)},
        )
    await limiter.hit(client_id)

    if not images:
        raise HTTPException(status_code=400, detail="No se recibieron imágenes")
    if len(images) > settings.MAX_IMAGES_PER_UPLOAD:
        raise HTTPException(
            status_code=400,
            detail=f"Máximo {settings.MAX_IMAGES_PER_UPLOAD} imágenes por consulta",
        )

    # Nothing is written until every file in the batch is accepted
    prepared = []
    for upload in images:
        content = await upload.read()
        try:
            prepared.append(await storage.prepare(content, upload.content_type))
        except ImageValidationError as exc:
            logger.warning(f"Image rejected: {normalize_file_name(upload.filename)}: {exc}")
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    image_urls = [await storage.store(optimized) for optimized in prepared]
    logger.info(f"Images uploaded: count={len(image_urls)}")
    return ImageUploadResponse(image_urls=image_urls)


@router.get("/images/{filename}")
async def get_image(filename: str, storage: ImageStorageService = Depends(get_image_storage)):
    """Serve a stored consultation image"""
    try:
        path = storage.resolve(filename)
    except ImageValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if path is None:
        raise HTTPException(status_code=404, detail="Imagen no encontrada")

    return FileResponse(
        path,
        media_type="image/jpeg",
        headers={
            "Cache-Control": IMAGE_CACHE_CONTROL,
            "X-Content-Type-Options": "nosniff",
        },
    )
