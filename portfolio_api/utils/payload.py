import json
import logging
from dataclasses import dataclass, field

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from portfolio_api.utils.exceptions import InvalidUpload, ValidationError, pydantic_errors

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@dataclass
class RequestPayload:
    data: dict = field(default_factory=dict)
    upload: UploadFile | None = None


async def _read_form(request: Request, file_field: str | None) -> RequestPayload:
    form = await request.form()
    payload = RequestPayload()
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            # Browsers send an empty part when no file was chosen.
            if not value.filename:
                continue
            if key != file_field:
                raise InvalidUpload(f"Unexpected file field '{key}'")
            if payload.upload is not None:
                raise InvalidUpload("Only one file may be uploaded per request")
            payload.upload = value
            continue

        if value == "":
            continue
        if key in payload.data:
            existing = payload.data[key]
            payload.data[key] = existing + [value] if isinstance(existing, list) else [existing, value]
        else:
            payload.data[key] = value
    return payload


async def _read_json(request: Request) -> RequestPayload:
    body = await request.body()
    if not body.strip():
        return RequestPayload()
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise ValidationError.for_field("body", "Request body must be valid JSON") from exc
    if not isinstance(data, dict):
        raise ValidationError.for_field("body", "Request body must be a JSON object")
    return RequestPayload(data=data)


def request_payload(file_field: str | None = None):
    """Dependency reading a JSON or form body, plus at most one file under ``file_field``."""

    async def dependency(request: Request) -> RequestPayload:
        content_type = request.headers.get("content-type", "").lower()
        if content_type.startswith(FORM_CONTENT_TYPES):
            return await _read_form(request, file_field)
        return await _read_json(request)

    return dependency


def validate_payload(schema: type[BaseModel], data: dict):
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(pydantic_errors(exc.errors())) from exc
