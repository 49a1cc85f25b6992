# Standard library imports
import io
from pathlib import Path
import secrets
import string
import time

# Third-party imports
from PIL import Image, UnidentifiedImageError
from starlette.concurrency import run_in_threadpool

# Local application imports
from consulta.core.monitoring.logging import get_logger
from consulta.settings import settings
from consulta.utils.validators.file_validator import is_stored_image_name

logger = get_logger(__name__)

# Decoded formats accepted for each declared content type
PIL_FORMATS = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
    "image/webp": "WEBP",
}
IMAGE_URL_PREFIX = "/api/images"
_NAME_ALPHABET = string.ascii_lowercase + string.digits


class ImageValidationError(Exception):
    """An uploaded file is not an acceptable image."""


class ImageStorageService:
    """Validates, downsizes and stores consultation images on local disk."""

    def __init__(self, upload_dir: Path | None = None) -> None:
        self.upload_dir = Path(upload_dir or settings.UPLOAD_DIR)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def validate(self, content: bytes, content_type: str | None) -> None:
        if content_type not in settings.ALLOWED_IMAGE_TYPES:
            raise ImageValidationError("Solo se permiten imágenes JPG, PNG o WebP")
        if not content:
            raise ImageValidationError("El archivo está vacío")
        if len(content) > settings.MAX_IMAGE_SIZE:
            max_mb = settings.MAX_IMAGE_SIZE // (1024 * 1024)
            raise ImageValidationError(f"Archivo muy grande. Máximo: {max_mb}MB")

    def optimize(self, content: bytes, content_type: str) -> bytes:
        """Decode, shrink to fit the configured box and re-encode as JPEG."""
        try:
            image = Image.open(io.BytesIO(content))
            image.load()
        except (UnidentifiedImageError, OSError) as exc:
            raise ImageValidationError("El archivo no es una imagen válida") from exc

        if image.format != PIL_FORMATS.get(content_type):
            raise ImageValidationError("El contenido no coincide con el tipo de imagen declarado")

        # Flatten transparency onto white, JPEG has no alpha channel
        if image.mode in ("RGBA", "LA", "P"):
            if image.mode == "P":
                image = image.convert("RGBA")
            background = Image.new("RGB", image.size, (255, 255, 255))
            background.paste(image, mask=image.split()[-1])
            image = background
        elif image.mode != "RGB":
            image = image.convert("RGB")

        # thumbnail never enlarges
        image.thumbnail(settings.IMAGE_MAX_DIMENSIONS, Image.Resampling.LANCZOS)

        output = io.BytesIO()
        image.save(output, format="JPEG", quality=settings.IMAGE_JPEG_QUALITY, optimize=True)
        return output.getvalue()

    @staticmethod
    def generate_name() -> str:
        suffix = "".join(secrets.choice(_NAME_ALPHABET) for _ in range(10))
        return f"consultation-{int(time.time() * 1000)}-{suffix}.jpg"

    async def prepare(self, content: bytes, content_type: str | None) -> bytes:
        """
        Validate and re-encode one uploaded image without touching the disk.

        Raises:
            ImageValidationError: If the file is rejected
        """
        self.validate(content, content_type)
        return await run_in_threadpool(self.optimize, content, content_type)

    async def store(self, optimized: bytes) -> str:
        """Write a prepared JPEG and return its public URL."""
        filename = self.generate_name()
        path = self.upload_dir / filename
        await run_in_threadpool(path.write_bytes, optimized)
        logger.info(f"Image stored: {filename} ({len(optimized)} bytes)")
        return f"{IMAGE_URL_PREFIX}/{filename}"

    def resolve(self, filename: str) -> Path | None:
        """
        Path of a stored image, or None when absent.

        Raises:
            ImageValidationError: If the name was not generated by this service
        """
        if not is_stored_image_name(filename):
            raise ImageValidationError("Nombre de archivo inválido")
        path = self.upload_dir / filename
        return path if path.is_file() else None
