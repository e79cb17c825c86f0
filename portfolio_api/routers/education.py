from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from portfolio_api.database import MAX_ROW_ID, get_db
from portfolio_api.models.education import Education
from portfolio_api.schemas.education import EducationResponse, EducationWrite
from portfolio_api.services.auth_middleware import get_current_admin
from portfolio_api.utils.exceptions import NotFound
from portfolio_api.utils.payload import RequestPayload, request_payload, validate_payload
from portfolio_api.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/education", tags=["Education"])
admin_router = APIRouter(
    prefix="/api/education",
    tags=["Education Admin"],
    dependencies=[Depends(get_current_admin)],
)


def _education_payload(record: Education) -> dict:
    return EducationResponse.model_validate(record).model_dump()


def _get_education(db: Session, education_id: int) -> Education:
    record = db.query(Education).filter(Education.id == education_id).first()
    if not record:
        raise NotFound("Education record not found")
    return record


@router.get("")
def list_education(db: Session = Depends(get_db)):
    try:
        records = (
            db.query(Education)
            .order_by(
                Education.sort_order.asc(),
                Education.end_date.desc(),
                Education.start_date.desc(),
            )
            .all()
        )
        return create_response(
            message="Education records fetched",
            data={
                "count": len(records),
                "education": [_education_payload(record) for record in records],
            },
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/{education_id}")
def get_education(
    education_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
):
    try:
        record = _get_education(db, education_id)
        return create_response(message="Education record fetched", data=_education_payload(record))
    except Exception as exc:
        return handle_exception(exc)


@admin_router.post("", status_code=status.HTTP_201_CREATED)
def create_education(
    payload: RequestPayload = Depends(request_payload()),
    db: Session = Depends(get_db),
):
    try:
        body = validate_payload(EducationWrite, payload.data)
        record = Education(**body.model_dump())
        db.add(record)
        db.commit()
        db.refresh(record)
        return create_response(
            message="Education record created successfully",
            data=_education_payload(record),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        db.rollback()
        return handle_exception(exc)


@admin_router.put("/{education_id}")
def update_education(
    education_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    payload: RequestPayload = Depends(request_payload()),
    db: Session = Depends(get_db),
):
    try:
        body = validate_payload(EducationWrite, payload.data)
        updated = (
            db.query(Education)
            .filter(Education.id == education_id)
            .update(body.model_dump(), synchronize_session=False)
        )
        if not updated:
            raise NotFound("Education record not found")
        db.commit()
        record = _get_education(db, education_id)
        return create_response(message="Education record updated successfully", data=_education_payload(record))
    except Exception as exc:
        db.rollback()
        return handle_exception(exc)


@admin_router.delete("/{education_id}")
def delete_education(
    education_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
):
    try:
        deleted = (
            db.query(Education)
            .filter(Education.id == education_id)
            .delete(synchronize_session=False)
        )
        if not deleted:
            raise NotFound("Education record not found")
        db.commit()
        return create_response(
            message="Education record deleted successfully",
            data={"deleted": True, "education_id": education_id},
        )
    except Exception as exc:
        db.rollback()
        return handle_exception(exc)
