from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from portfolio_api.database import MAX_ROW_ID, get_db
from portfolio_api.models.skill import Skill
from portfolio_api.schemas.skill import SkillResponse, SkillWrite
from portfolio_api.services.auth_middleware import get_current_admin
from portfolio_api.utils.exceptions import NotFound
from portfolio_api.utils.payload import RequestPayload, request_payload, validate_payload
from portfolio_api.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/skills", tags=["Skills"])
admin_router = APIRouter(
    prefix="/api/skills",
    tags=["Skills Admin"],
    dependencies=[Depends(get_current_admin)],
)


def _skill_payload(skill: Skill) -> dict:
    return SkillResponse.model_validate(skill).model_dump()


def _get_skill(db: Session, skill_id: int) -> Skill:
    skill = db.query(Skill).filter(Skill.id == skill_id).first()
    if not skill:
        raise NotFound("Skill not found")
    return skill


@router.get("")
def list_skills(
    featured: bool = Query(False, description="Only return featured skills."),
    category: str | None = Query(None),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Skill)
        if featured:
            query = query.filter(Skill.is_featured == True)
        if category:
            query = query.filter(Skill.category == category)
        skills = query.order_by(Skill.sort_order.asc(), Skill.name.asc()).all()
        return create_response(
            message="Skills fetched",
            data={"count": len(skills), "skills": [_skill_payload(skill) for skill in skills]},
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/{skill_id}")
def get_skill(
    skill_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
):
    try:
        return create_response(message="Skill fetched", data=_skill_payload(_get_skill(db, skill_id)))
    except Exception as exc:
        return handle_exception(exc)


@admin_router.post("", status_code=status.HTTP_201_CREATED)
def create_skill(
    payload: RequestPayload = Depends(request_payload()),
    db: Session = Depends(get_db),
):
    try:
        body = validate_payload(SkillWrite, payload.data)
        skill = Skill(**body.model_dump())
        db.add(skill)
        db.commit()
        db.refresh(skill)
        return create_response(
            message="Skill created successfully",
            data=_skill_payload(skill),
            status_code=status.HTTP_201_CREATED,
        )
    except Exception as exc:
        db.rollback()
        return handle_exception(exc)


@admin_router.put("/{skill_id}")
def update_skill(
    skill_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    payload: RequestPayload = Depends(request_payload()),
    db: Session = Depends(get_db),
):
    try:
        body = validate_payload(SkillWrite, payload.data)
        updated = (
            db.query(Skill)
            .filter(Skill.id == skill_id)
            .update(body.model_dump(), synchronize_session=False)
        )
        if not updated:
            raise NotFound("Skill not found")
        db.commit()
        return create_response(message="Skill updated successfully", data=_skill_payload(_get_skill(db, skill_id)))
    except Exception as exc:
        db.rollback()
        return handle_exception(exc)


@admin_router.delete("/{skill_id}")
def delete_skill(
    skill_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
):
    try:
        deleted = db.query(Skill).filter(Skill.id == skill_id).delete(synchronize_session=False)
        if not deleted:
            raise NotFound("Skill not found")
        db.commit()
        return create_response(
            message="Skill deleted successfully",
            data={"deleted": True, "skill_id": skill_id},
        )
    except Exception as exc:
        db.rollback()
        return handle_exception(exc)
