import logging

from fastapi import APIRouter, Cookie, HTTPException, Response, status

from app.config import settings
from app.dependencies import (
    DbSession,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from app.models.user import User
from app.schemas.auth import AccessTokenResponse, LoginRequest, SignupRequest
from app.services import user_directory

log = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

REFRESH_COOKIE_NAME = "devconnect_refresh_token"
REFRESH_COOKIE_MAX_AGE = settings.refresh_token_expire_days * 86400


def set_refresh_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=True,
        samesite="none",
        path="/auth",
        max_age=REFRESH_COOKIE_MAX_AGE,
    )


def delete_refresh_cookie(response: Response) -> None:
    response.delete_cookie(
        key=REFRESH_COOKIE_NAME,
        httponly=True,
        secure=True,
        samesite="none",
        path="/auth",
    )


@router.post(
    "/signup", response_model=AccessTokenResponse, status_code=status.HTTP_201_CREATED
)
def signup(request: SignupRequest, response: Response, db: DbSession):
    if user_directory.find_user_by_email(db, request.email) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An account with this email already exists.",
        )

    user = User(
        email=request.email,
        first_name=request.first_name,
        last_name=request.last_name,
        password_hash="",
        **request.model_dump(
            include={"age", "gender", "photo_url", "about", "skills"},
            exclude_none=True,
        ),
    )
    user.set_password(request.password)
    db.add(user)
    db.flush()
    log.info("User %s signed up", user.id)

    set_refresh_cookie(response, create_refresh_token(user))
    return AccessTokenResponse(access_token=create_access_token(user))


@router.post("/login", response_model=AccessTokenResponse)
def login(request: LoginRequest, response: Response, db: DbSession):
    user = user_directory.find_user_by_email(db, request.email)

    if user is None or not user.check_password(request.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)

    set_refresh_cookie(response, create_refresh_token(user))
    return AccessTokenResponse(access_token=create_access_token(user))


@router.post("/refresh", response_model=AccessTokenResponse)
def refresh(
    response: Response,
    db: DbSession,
    devconnect_refresh_token: str | None = Cookie(default=None),
):
    if devconnect_refresh_token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)

    payload = decode_token(devconnect_refresh_token)
    if payload.get("type") != "refresh":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)

    user = user_directory.find_user_by_id(db, int(payload["sub"]))
    if user is None or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)

    set_refresh_cookie(response, create_refresh_token(user))
    return AccessTokenResponse(access_token=create_access_token(user))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(response: Response):
    delete_refresh_cookie(response)
