from fastapi import APIRouter, HTTPException, status

from app.dependencies import CurrentUser, DbSession
from app.schemas.auth import PasswordUpdate
from app.schemas.user import UserRead, UserUpdate
from app.services import user_directory

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=UserRead)
def view_profile(user: CurrentUser):
    return user


@router.patch("", response_model=UserRead)
def edit_profile(updates: UserUpdate, user: CurrentUser, db: DbSession):
    # UserUpdate forbids extra keys, so only whitelisted fields reach setattr.
    for field, value in updates.model_dump(exclude_unset=True).items():
        setattr(user, field, value)

    db.flush()
    db.refresh(user)
    return user


@router.put("/password", status_code=status.HTTP_204_NO_CONTENT)
def update_password(request: PasswordUpdate, user: CurrentUser, db: DbSession):
    if not user.check_password(request.old_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Old password is incorrect.",
        )
    user.set_password(request.new_password)
    db.flush()


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_profile(user: CurrentUser, db: DbSession):
    user_directory.delete_user(db, user)
