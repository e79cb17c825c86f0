import time

from fastapi import APIRouter, Depends, Request

from portfolio_api.config import settings
from portfolio_api.services.auth_middleware import get_current_user
from portfolio_api.services.upload_service import store_upload
from portfolio_api.utils.exceptions import InvalidUpload
from portfolio_api.utils.payload import RequestPayload, request_payload
from portfolio_api.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/upload", tags=["Upload"])

UPLOAD_FIELD = "image"


def public_base_url(request: Request) -> str:
    base_url = (settings.BACKEND_BASE_URL or str(request.base_url)).rstrip("/")
    if settings.is_production and base_url.startswith("http://"):
        return "https://" + base_url[len("http://"):]
    return base_url


@router.post("/single", dependencies=[Depends(get_current_user)])
def upload_single(
    request: Request,
    payload: RequestPayload = Depends(request_payload(UPLOAD_FIELD)),
):
    try:
        if payload.upload is None:
            raise InvalidUpload("No file uploaded")
        stored = store_upload(payload.upload, UPLOAD_FIELD)
        stored["url"] = f"{public_base_url(request)}{stored['path']}?t={int(time.time() * 1000)}"
        return create_response(message="File uploaded successfully", data=stored)
    except Exception as exc:
        return handle_exception(exc, "Failed to upload file")
