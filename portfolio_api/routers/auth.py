import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from portfolio_api.database import get_db
from portfolio_api.models.user import User
from portfolio_api.schemas.user import LoginRequest, PasswordChange, UserResponse
from portfolio_api.services.auth_middleware import get_current_user
from portfolio_api.services.auth_service import hash_password, token_for_user, verify_password
from portfolio_api.utils.exceptions import Unauthorized
from portfolio_api.utils.payload import RequestPayload, request_payload, validate_payload
from portfolio_api.utils.response import create_response, handle_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login")
def login(
    payload: RequestPayload = Depends(request_payload()),
    db: Session = Depends(get_db),
):
    try:
        body = validate_payload(LoginRequest, payload.data)
        user = db.query(User).filter(User.email == body.email.lower()).first()
        if not user or not verify_password(body.password, user.password_hash):
            logger.warning("Failed login attempt for %s", body.email)
            raise Unauthorized("Invalid credentials")

        return create_response(
            message="Login successful",
            data={
                "access_token": token_for_user(user),
                "token_type": "bearer",
                "user": UserResponse.model_validate(user).model_dump(),
            },
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/me")
def read_current_user(current_user: User = Depends(get_current_user)):
    try:
        return create_response(
            message="User fetched",
            data=UserResponse.model_validate(current_user).model_dump(),
        )
    except Exception as exc:
        return handle_exception(exc)


@router.put("/password")
def change_password(
    current_user: User = Depends(get_current_user),
    payload: RequestPayload = Depends(request_payload()),
    db: Session = Depends(get_db),
):
    try:
        body = validate_payload(PasswordChange, payload.data)
        if not verify_password(body.current_password, current_user.password_hash):
            raise Unauthorized("Current password is incorrect")

        updated = (
            db.query(User)
            .filter(User.id == current_user.id)
            .update({"password_hash": hash_password(body.new_password)}, synchronize_session=False)
        )
        db.commit()
        return create_response(message="Password updated successfully", data={"updated": bool(updated)})
    except Exception as exc:
        db.rollback()
        return handle_exception(exc)
