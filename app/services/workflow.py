"""Connection workflow: requests, reviews, the discovery feed and removal.

The functions here hold no state between calls; everything goes through the
relationship store and the user directory with the caller's session.
"""

import logging
import math

from sqlalchemy.orm import Session

from app.config import settings
from app.errors import (
    AlreadyReviewed,
    ConnectionNotFound,
    DuplicateRelationship,
    InvalidStatus,
    RequestNotFound,
    ReverseRequestExists,
    SelfRequestForbidden,
    SelfReviewForbidden,
    UserNotFound,
)
from app.models.connection_request import (
    INTERESTED,
    REVIEW_STATUSES,
    SEND_STATUSES,
    ConnectionRequest,
)
from app.models.user import User
from app.services import relationship_store, user_directory

log = logging.getLogger(__name__)


def send_request(
    db: Session, from_user: User, to_user_id: int, status: str
) -> ConnectionRequest:
    """Record ``from_user``'s interest (or lack of it) in another user.

    Parameters:
        db: Database session.
        from_user: The acting user.
        to_user_id: The user the request is aimed at.
        status: ``interested`` or ``ignored``.

    Returns:
        The created request.

    Raises:
        InvalidStatus: ``status`` is not a sendable status.
        UserNotFound: ``to_user_id`` does not exist.
        SelfRequestForbidden: ``to_user_id`` is the acting user.
        ReverseRequestExists: The other user already sent a request; it
            should be reviewed instead.
        DuplicateRelationship: The acting user already sent a request.
    """
    if status not in SEND_STATUSES:
        raise InvalidStatus("Status must be either interested or ignored.")

    to_user: User | None = user_directory.find_user_by_id(db, to_user_id)
    if to_user is None:
        raise UserNotFound(
            "The user you are trying to connect to does not exist."
        )

    if to_user.id == from_user.id:
        raise SelfRequestForbidden()

    if relationship_store.find_by_pair(db, to_user.id, from_user.id) is not None:
        raise ReverseRequestExists()

    if relationship_store.find_by_pair(db, from_user.id, to_user.id) is not None:
        raise DuplicateRelationship()

    record = relationship_store.create(db, from_user.id, to_user.id, status)
    log.info(
        "User %s sent a %s request to user %s", from_user.id, status, to_user.id
    )
    return record


def review_request(
    db: Session, reviewer: User, from_user_id: int, decision: str
) -> ConnectionRequest:
    """Accept or reject a pending request addressed to ``reviewer``.

    Parameters:
        db: Database session.
        reviewer: The acting user, who must be the request's receiver.
        from_user_id: The user who sent the request.
        decision: ``accepted`` or ``rejected``.

    Returns:
        The updated request.

    Raises:
        InvalidStatus: ``decision`` is not a review status.
        RequestNotFound: No request from ``from_user_id`` to the reviewer.
        AlreadyReviewed: The request is not in the ``interested`` state.
        UserNotFound: The sender no longer exists.
        SelfReviewForbidden: The reviewer is the sender.
    """
    if decision not in REVIEW_STATUSES:
        raise InvalidStatus("Status must be either accepted or rejected.")

    record = relationship_store.find_by_pair(db, from_user_id, reviewer.id)
    if record is None:
        raise RequestNotFound()

    if record.status != INTERESTED:
        raise AlreadyReviewed(
            f"This connection request is {record.status} and cannot be reviewed."
        )

    if not user_directory.user_exists(db, from_user_id):
        raise UserNotFound(
            "The user who sent the connection request does not exist."
        )

    if from_user_id == reviewer.id:
        raise SelfReviewForbidden()

    relationship_store.update_status(db, record, decision)
    log.info(
        "User %s %s the request from user %s", reviewer.id, decision, from_user_id
    )
    return record


def get_feed(
    db: Session, user: User, page: int = 1, page_size: int | None = None
) -> dict:
    """Page through the users ``user`` has never interacted with.

    Any request in either direction, whatever its status, removes the other
    party from the feed.

    Parameters:
        db: Database session.
        user: The acting user.
        page: 1-based page number; values below 1 are treated as 1.
        page_size: Users per page, clamped to the configured maximum.

    Returns:
        Dict matching the FeedPage schema.
    """
    if page_size is None:
        page_size = settings.feed_default_page_size
    page = max(page, 1)
    page_size = min(max(page_size, 1), settings.feed_max_page_size)

    excluded: set[int] = {user.id}
    for record in relationship_store.find_all_involving(db, user.id):
        excluded.add(record.from_user_id)
        excluded.add(record.to_user_id)

    total_count = user_directory.count_users_excluding(db, excluded)
    items = user_directory.find_users_excluding(
        db, excluded, skip=(page - 1) * page_size, limit=page_size
    )
    return {
        "items": items,
        "page": page,
        "page_size": page_size,
        "total_count": total_count,
        "total_pages": math.ceil(total_count / page_size),
        "has_next_page": page * page_size < total_count,
    }


def get_incoming_requests(db: Session, user: User) -> list[dict]:
    """List pending requests addressed to ``user`` with the sender attached."""
    records = relationship_store.find_incoming(db, user.id, status=INTERESTED)
    senders = user_directory.find_users_by_ids(
        db, {record.from_user_id for record in records}
    )
    return [
        {
            "id": record.id,
            "status": record.status,
            "from_user": senders[record.from_user_id],
            "created_at": record.created_at,
        }
        for record in records
        if record.from_user_id in senders
    ]


def get_connections(db: Session, user: User) -> list[User]:
    """List the users ``user`` has an accepted connection with."""
    records = relationship_store.find_accepted(db, user.id)
    other_ids = [record.other_party(user.id) for record in records]
    users = user_directory.find_users_by_ids(db, other_ids)
    return [users[other_id] for other_id in other_ids if other_id in users]


def remove_connection(db: Session, user: User, other_user_id: int) -> None:
    """Delete the accepted connection between ``user`` and another user.

    Raises:
        ConnectionNotFound: The two users are not connected.
    """
    record = relationship_store.find_accepted_between(db, user.id, other_user_id)
    if record is None:
        raise ConnectionNotFound()
    relationship_store.delete(db, record)
    log.info("User %s removed connection with user %s", user.id, other_user_id)
