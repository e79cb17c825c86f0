import logging

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from portfolio_api.database import MAX_ROW_ID, get_db
from portfolio_api.models.contact_message import ContactMessage
from portfolio_api.schemas.contact import (
    ContactMessageCreate,
    ContactMessageResponse,
    ContactStats,
    ContactStatus,
    ContactStatusUpdate,
)
from portfolio_api.services.auth_middleware import get_current_admin
from portfolio_api.utils.exceptions import NotFound
from portfolio_api.utils.payload import RequestPayload, request_payload, validate_payload
from portfolio_api.utils.response import create_response, handle_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contact", tags=["Contact"])
admin_router = APIRouter(
    prefix="/api/contact",
    tags=["Contact Admin"],
    dependencies=[Depends(get_current_admin)],
)


def _message_payload(message: ContactMessage) -> dict:
    return ContactMessageResponse.model_validate(message).model_dump()


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_message(
    payload: RequestPayload = Depends(request_payload()),
    db: Session = Depends(get_db),
):
    try:
        body = validate_payload(ContactMessageCreate, payload.data)
        message = ContactMessage(**body.model_dump())
        db.add(message)
        db.commit()
        db.refresh(message)
        logger.info("Contact message %s received from %s", message.id, message.email)
        return create_response(
            message="Message sent successfully! I'll get back to you soon.",
            data={"message_id": message.id},
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        db.rollback()
        return handle_exception(exc, "Failed to send message. Please try again later.")


@admin_router.get("/messages")
def list_messages(
    status_filter: ContactStatus | None = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(ContactMessage)
        if status_filter is not None:
            query = query.filter(ContactMessage.status == status_filter.value)
        messages = query.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc()).all()
        return create_response(
            message="Contact messages fetched",
            data={
                "count": len(messages),
                "messages": [_message_payload(message) for message in messages],
            },
        )
    except Exception as exc:
        return handle_exception(exc)


@admin_router.get("/messages/{message_id}")
def get_message(
    message_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
):
    try:
        message = db.query(ContactMessage).filter(ContactMessage.id == message_id).first()
        if not message:
            raise NotFound("Message not found")
        return create_response(message="Contact message fetched", data=_message_payload(message))
    except Exception as exc:
        return handle_exception(exc)


@admin_router.put("/messages/{message_id}/status")
def update_message_status(
    message_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    payload: RequestPayload = Depends(request_payload()),
    db: Session = Depends(get_db),
):
    try:
        body = validate_payload(ContactStatusUpdate, payload.data)
        updated = (
            db.query(ContactMessage)
            .filter(ContactMessage.id == message_id)
            .update({"status": body.status.value}, synchronize_session=False)
        )
        if not updated:
            raise NotFound("Message not found")
        db.commit()
        return create_response(
            message="Message status updated successfully",
            data={"message_id": message_id, "status": body.status.value},
        )
    except Exception as exc:
        db.rollback()
        return handle_exception(exc)


@admin_router.delete("/messages/{message_id}")
def delete_message(
    message_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
):
    try:
        deleted = (
            db.query(ContactMessage)
            .filter(ContactMessage.id == message_id)
            .delete(synchronize_session=False)
        )
        if not deleted:
            raise NotFound("Message not found")
        db.commit()
        return create_response(
            message="Message deleted successfully",
            data={"deleted": True, "message_id": message_id},
        )
    except Exception as exc:
        db.rollback()
        return handle_exception(exc)


@admin_router.get("/stats")
def message_stats(db: Session = Depends(get_db)):
    try:
        rows = (
            db.query(ContactMessage.status, func.count(ContactMessage.id))
            .group_by(ContactMessage.status)
            .all()
        )
        counts = {state.value: 0 for state in ContactStatus}
        for state, count in rows:
            counts[state] = count
        stats = ContactStats(total=sum(counts.values()), **counts)
        return create_response(message="Contact stats fetched", data=stats.model_dump())
    except Exception as exc:
        return handle_exception(exc)
