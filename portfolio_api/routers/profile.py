from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from portfolio_api.database import get_db
from portfolio_api.models.profile import Profile
from portfolio_api.schemas.profile import ProfileResponse, ProfileUpdate
from portfolio_api.services.auth_middleware import get_current_admin
from portfolio_api.services.upload_service import remove_upload, store_upload
from portfolio_api.utils.exceptions import NotFound
from portfolio_api.utils.payload import RequestPayload, request_payload, validate_payload
from portfolio_api.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/profile", tags=["Profile"])

IMAGE_FIELD = "profile_image"


def _latest_profile(db: Session) -> Profile | None:
    """The profile is a singleton: the most recent row wins."""
    return db.query(Profile).order_by(Profile.id.desc()).first()


def _profile_payload(profile: Profile) -> dict:
    return ProfileResponse.model_validate(profile).model_dump()


@router.get("")
def get_profile(db: Session = Depends(get_db)):
    try:
        profile = _latest_profile(db)
        if not profile:
            raise NotFound("Profile not found")
        return create_response(message="Profile fetched successfully", data=_profile_payload(profile))
    except Exception as exc:
        return handle_exception(exc)


@router.put("", dependencies=[Depends(get_current_admin)])
def update_profile(
    payload: RequestPayload = Depends(request_payload(IMAGE_FIELD)),
    db: Session = Depends(get_db),
):
    new_image = None
    committed = False
    try:
        body = validate_payload(ProfileUpdate, payload.data)
        values = body.model_dump()
        if payload.upload is not None:
            new_image = store_upload(payload.upload, IMAGE_FIELD)["path"]
            values["profile_image"] = new_image

        existing = _latest_profile(db)
        if existing is None:
            profile = Profile(**values)
            db.add(profile)
            db.commit()
            committed = True
            db.refresh(profile)
            return create_response(message="Profile created successfully", data=_profile_payload(profile))

        profile_id = existing.id
        old_image = existing.profile_image
        db.query(Profile).filter(Profile.id == profile_id).update(values, synchronize_session=False)
        db.commit()
        committed = True

        if new_image:
            remove_upload(old_image)
        profile = db.query(Profile).filter(Profile.id == profile_id).first()
        return create_response(message="Profile updated successfully", data=_profile_payload(profile))
    except Exception as exc:
        if not committed:
            db.rollback()
            remove_upload(new_image)
        return handle_exception(exc)
