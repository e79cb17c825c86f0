from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from portfolio_api.database import MAX_ROW_ID, get_db
from portfolio_api.models.testimonial import Testimonial
from portfolio_api.schemas.testimonial import TestimonialResponse, TestimonialWrite
from portfolio_api.services.auth_middleware import get_current_admin
from portfolio_api.services.upload_service import remove_upload, store_upload
from portfolio_api.utils.exceptions import NotFound
from portfolio_api.utils.payload import RequestPayload, request_payload, validate_payload
from portfolio_api.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/testimonials", tags=["Testimonials"])
admin_router = APIRouter(
    prefix="/api/testimonials",
    tags=["Testimonials Admin"],
    dependencies=[Depends(get_current_admin)],
)

AVATAR_FIELD = "testimonial_avatar"


def _testimonial_payload(testimonial: Testimonial) -> dict:
    return TestimonialResponse.model_validate(testimonial).model_dump()


def _get_testimonial(db: Session, testimonial_id: int) -> Testimonial:
    testimonial = db.query(Testimonial).filter(Testimonial.id == testimonial_id).first()
    if not testimonial:
        raise NotFound("Testimonial not found")
    return testimonial


@router.get("")
def list_testimonials(
    featured: bool = Query(False, description="Only return featured testimonials."),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Testimonial)
        if featured:
            query = query.filter(Testimonial.is_featured == True)
        testimonials = query.order_by(Testimonial.sort_order.asc(), Testimonial.created_at.desc()).all()
        return create_response(
            message="Testimonials fetched",
            data={
                "count": len(testimonials),
                "testimonials": [_testimonial_payload(item) for item in testimonials],
            },
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/{testimonial_id}")
def get_testimonial(
    testimonial_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
):
    try:
        testimonial = _get_testimonial(db, testimonial_id)
        return create_response(message="Testimonial fetched", data=_testimonial_payload(testimonial))
    except Exception as exc:
        return handle_exception(exc)


@admin_router.post("", status_code=status.HTTP_201_CREATED)
def create_testimonial(
    payload: RequestPayload = Depends(request_payload(AVATAR_FIELD)),
    db: Session = Depends(get_db),
):
    new_avatar = None
    try:
        body = validate_payload(TestimonialWrite, payload.data)
        values = body.model_dump()
        if payload.upload is not None:
            new_avatar = store_upload(payload.upload, AVATAR_FIELD)["path"]
            values["avatar_url"] = new_avatar

        testimonial = Testimonial(**values)
        db.add(testimonial)
        db.commit()
        db.refresh(testimonial)
        return create_response(
            message="Testimonial created successfully",
            data=_testimonial_payload(testimonial),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        db.rollback()
        remove_upload(new_avatar)
        return handle_exception(exc)


@admin_router.put("/{testimonial_id}")
def update_testimonial(
    testimonial_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    payload: RequestPayload = Depends(request_payload(AVATAR_FIELD)),
    db: Session = Depends(get_db),
):
    new_avatar = None
    committed = False
    try:
        body = validate_payload(TestimonialWrite, payload.data)
        values = body.model_dump()
        old_avatar = None
        if payload.upload is not None:
            old_avatar = (
                db.query(Testimonial.avatar_url)
                .filter(Testimonial.id == testimonial_id)
                .scalar()
            )
            new_avatar = store_upload(payload.upload, AVATAR_FIELD)["path"]
            values["avatar_url"] = new_avatar

        updated = (
            db.query(Testimonial)
            .filter(Testimonial.id == testimonial_id)
            .update(values, synchronize_session=False)
        )
        if not updated:
            raise NotFound("Testimonial not found")
        db.commit()
        committed = True

        if new_avatar:
            remove_upload(old_avatar)
        testimonial = _get_testimonial(db, testimonial_id)
        return create_response(message="Testimonial updated successfully", data=_testimonial_payload(testimonial))
    except Exception as exc:
        if not committed:
            db.rollback()
            remove_upload(new_avatar)
        return handle_exception(exc)


@admin_router.delete("/{testimonial_id}")
def delete_testimonial(
    testimonial_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
):
    try:
        avatar_url = (
            db.query(Testimonial.avatar_url)
            .filter(Testimonial.id == testimonial_id)
            .scalar()
        )
        remove_upload(avatar_url)

        deleted = (
            db.query(Testimonial)
            .filter(Testimonial.id == testimonial_id)
            .delete(synchronize_session=False)
        )
        if not deleted:
            raise NotFound("Testimonial not found")
        db.commit()
        return create_response(
            message="Testimonial deleted successfully",
            data={"deleted": True, "testimonial_id": testimonial_id},
        )
    except Exception as exc:
        db.rollback()
        return handle_exception(exc)
