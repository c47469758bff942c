from typing import Annotated

from fastapi import APIRouter, Query, status

from app.config import settings
from app.dependencies import CurrentUser, DbSession
from app.schemas.connection_request import FeedPage, IncomingRequestRead
from app.schemas.user import UserPublic
from app.services import workflow

router = APIRouter(prefix="/user", tags=["connections"])


@router.get("/requests", response_model=list[IncomingRequestRead])
def list_requests(user: CurrentUser, db: DbSession) -> list[dict]:
    """List pending requests received by the current user.

    Parameters:
        user: The authenticated user.
        db: Database session.

    Returns:
        Pending incoming requests with the sender's public profile.
    """
    return workflow.get_incoming_requests(db, user)


@router.get("/connections", response_model=list[UserPublic])
def list_connections(user: CurrentUser, db: DbSession):
    """List the public profiles of everyone the current user is connected to."""
    return workflow.get_connections(db, user)


@router.get("/feed", response_model=FeedPage)
def feed(
    user: CurrentUser,
    db: DbSession,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[
        int, Query(ge=1, le=settings.feed_max_page_size)
    ] = settings.feed_default_page_size,
) -> dict:
    """Page through users the current user has not interacted with yet.

    Parameters:
        user: The authenticated user.
        db: Database session.
        page: 1-based page number.
        limit: Page size.

    Returns:
        One feed page with pagination metadata.
    """
    return workflow.get_feed(db, user, page=page, page_size=limit)


@router.delete("/connections/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_connection(user_id: int, user: CurrentUser, db: DbSession) -> None:
    """Remove an accepted connection with another user.

    Raises:
        ConnectionNotFound: The users are not connected.
    """
    workflow.remove_connection(db, user, user_id)
