import logging
import time
import uuid
from pathlib import Path

from starlette.datastructures import UploadFile

from portfolio_api.config import settings
from portfolio_api.utils.exceptions import InvalidUpload

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def ensure_upload_dir() -> Path:
    settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    return settings.UPLOAD_DIR


def public_path(filename: str) -> str:
    return f"{settings.UPLOAD_URL_PREFIX}/{filename}"


def resolve_public_path(stored_path: str | None) -> Path | None:
    """Map a stored ``/uploads/...`` path back to a file inside the upload dir."""
    if not stored_path:
        return None
    prefix = settings.UPLOAD_URL_PREFIX.rstrip("/") + "/"
    path = stored_path.split("?", 1)[0]
    if not path.startswith(prefix):
        return None
    candidate = (settings.UPLOAD_DIR / path[len(prefix):]).resolve()
    if candidate == settings.UPLOAD_DIR or settings.UPLOAD_DIR not in candidate.parents:
        return None
    return candidate


def store_upload(upload: UploadFile, field_name: str) -> dict:
    """Validate and persist an uploaded image; returns its stored metadata."""
    content_type = (upload.content_type or "").lower()
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise InvalidUpload("Only image files (jpeg, png, gif, webp) are allowed")

    extension = Path(upload.filename or "").suffix.lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise InvalidUpload("Unsupported file extension")

    contents = upload.file.read(settings.max_upload_bytes + 1)
    if not contents:
        raise InvalidUpload("Empty file upload")
    if len(contents) > settings.max_upload_bytes:
        raise InvalidUpload(f"File too large. Maximum size is {settings.MAX_UPLOAD_SIZE_MB}MB")

    filename = f"{field_name}-{int(time.time())}-{uuid.uuid4().hex[:8]}{extension}"
    target = ensure_upload_dir() / filename
    target.write_bytes(contents)
    logger.info("Stored upload %s (%s bytes)", filename, len(contents))

    return {
        "filename": filename,
        "originalname": upload.filename,
        "mimetype": content_type,
        "size": len(contents),
        "path": public_path(filename),
    }


def remove_upload(stored_path: str | None) -> bool:
    """Best-effort removal of a previously stored file. Never raises."""
    file_path = resolve_public_path(stored_path)
    if file_path is None:
        return False
    try:
        if not file_path.exists():
            logger.warning("Upload already missing: %s", file_path)
            return False
        file_path.unlink()
        logger.info("Deleted upload %s", file_path)
        return True
    except OSError:
        logger.exception("Error deleting upload %s", file_path)
        return False
