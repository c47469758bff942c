from fastapi import APIRouter, status

from app.dependencies import CurrentUser, DbSession
from app.schemas.connection_request import ConnectionRequestRead
from app.services import workflow

router = APIRouter(prefix="/request", tags=["requests"])


@router.post(
    "/send/{request_status}/{to_user_id}",
    response_model=ConnectionRequestRead,
    status_code=status.HTTP_201_CREATED,
)
def send_request(
    request_status: str, to_user_id: int, user: CurrentUser, db: DbSession
):
    """Send an ``interested`` or ``ignored`` request to another user."""
    record = workflow.send_request(db, user, to_user_id, request_status)
    db.refresh(record)
    return record


@router.post(
    "/review/{request_status}/{from_user_id}",
    response_model=ConnectionRequestRead,
)
def review_request(
    request_status: str, from_user_id: int, user: CurrentUser, db: DbSession
):
    """Accept or reject a pending request sent by ``from_user_id``."""
    record = workflow.review_request(db, user, from_user_id, request_status)
    db.refresh(record)
    return record
