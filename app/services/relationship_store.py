"""Storage and lookup of connection requests.

Every function takes the caller's session and leaves transaction control to
it; ``create`` is the only function that opens a SAVEPOINT, so that a lost
insert race does not poison the surrounding unit of work.
"""

import logging

from sqlalchemy import delete as sa_delete
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import DuplicateRelationship, ReverseRequestExists
from app.models.connection_request import (
    ACCEPTED,
    ConnectionRequest,
    make_pair_key,
)

log = logging.getLogger(__name__)


def _involving(user_id: int):
    return or_(
        ConnectionRequest.from_user_id == user_id,
        ConnectionRequest.to_user_id == user_id,
    )


def create(
    db: Session, from_user_id: int, to_user_id: int, status: str
) -> ConnectionRequest:
    """Insert a new connection request.

    Parameters:
        db: Database session.
        from_user_id: The initiating user.
        to_user_id: The receiving user.
        status: Initial status.

    Returns:
        The stored request.

    Raises:
        ReverseRequestExists: The other user already holds a request towards
            ``from_user_id``.
        DuplicateRelationship: A request for this ordered pair already exists.
    """
    record = ConnectionRequest(
        from_user_id=from_user_id,
        to_user_id=to_user_id,
        pair_key=make_pair_key(from_user_id, to_user_id),
        status=status,
    )
    try:
        with db.begin_nested():
            db.add(record)
    except IntegrityError:
        log.info(
            "Insert of request %s -> %s lost to an existing record",
            from_user_id,
            to_user_id,
        )
        if find_by_pair(db, to_user_id, from_user_id) is not None:
            raise ReverseRequestExists()
        raise DuplicateRelationship()
    return record


def find_by_pair(
    db: Session, from_user_id: int, to_user_id: int
) -> ConnectionRequest | None:
    return db.execute(
        select(ConnectionRequest).where(
            ConnectionRequest.from_user_id == from_user_id,
            ConnectionRequest.to_user_id == to_user_id,
        )
    ).scalar_one_or_none()


def find_incoming(
    db: Session, to_user_id: int, status: str | None = None
) -> list[ConnectionRequest]:
    query = select(ConnectionRequest).where(
        ConnectionRequest.to_user_id == to_user_id
    )
    if status is not None:
        query = query.where(ConnectionRequest.status == status)
    return list(
        db.execute(query.order_by(ConnectionRequest.id)).scalars().all()
    )


def find_all_involving(db: Session, user_id: int) -> list[ConnectionRequest]:
    return list(
        db.execute(
            select(ConnectionRequest)
            .where(_involving(user_id))
            .order_by(ConnectionRequest.id)
        ).scalars().all()
    )


def find_accepted(db: Session, user_id: int) -> list[ConnectionRequest]:
    return list(
        db.execute(
            select(ConnectionRequest)
            .where(ConnectionRequest.status == ACCEPTED, _involving(user_id))
            .order_by(ConnectionRequest.id)
        ).scalars().all()
    )


def find_accepted_between(
    db: Session, user_id: int, other_user_id: int
) -> ConnectionRequest | None:
    return db.execute(
        select(ConnectionRequest).where(
            ConnectionRequest.status == ACCEPTED,
            ConnectionRequest.pair_key == make_pair_key(user_id, other_user_id),
        )
    ).scalar_one_or_none()


def update_status(
    db: Session, record: ConnectionRequest, new_status: str
) -> ConnectionRequest:
    """Persist a status change the caller has already validated."""
    record.status = new_status
    db.flush()
    return record


def delete(db: Session, record: ConnectionRequest) -> None:
    db.delete(record)
    db.flush()


def delete_all_involving(db: Session, user_id: int) -> int:
    """Remove every request the user is a party to.

    Returns:
        Number of deleted rows.
    """
    result = db.execute(
        sa_delete(ConnectionRequest)
        .where(_involving(user_id))
        .execution_options(synchronize_session="fetch")
    )
    return result.rowcount
