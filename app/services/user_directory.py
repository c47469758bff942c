import logging
from collections.abc import Collection

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.user import User
from app.services import relationship_store

log = logging.getLogger(__name__)


def find_user_by_id(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(
        select(User).where(User.email == email.strip().lower())
    ).scalar_one_or_none()


def user_exists(db: Session, user_id: int) -> bool:
    return db.execute(
        select(User.id).where(User.id == user_id)
    ).first() is not None


def count_users_excluding(db: Session, excluded_ids: Collection[int]) -> int:
    return db.execute(
        select(func.count())
        .select_from(User)
        .where(User.is_active, User.id.not_in(list(excluded_ids)))
    ).scalar_one()


def find_users_excluding(
    db: Session, excluded_ids: Collection[int], skip: int, limit: int
) -> list[User]:
    """Return a page of active users outside ``excluded_ids`` in id order.

    Parameters:
        db: Database session.
        excluded_ids: Ids that must not appear in the result.
        skip: Number of matching users to skip.
        limit: Maximum number of users to return.

    Returns:
        Matching users, ordered by id so that consecutive pages never
        overlap.
    """
    return list(
        db.execute(
            select(User)
            .where(User.is_active, User.id.not_in(list(excluded_ids)))
            .order_by(User.id)
            .offset(skip)
            .limit(limit)
        ).scalars().all()
    )


def find_users_by_ids(db: Session, user_ids: Collection[int]) -> dict[int, User]:
    if not user_ids:
        return {}
    users = db.execute(
        select(User).where(User.id.in_(list(user_ids)))
    ).scalars().all()
    return {user.id: user for user in users}


def delete_user(db: Session, user: User) -> None:
    """Delete a user together with every connection request naming them."""
    removed = relationship_store.delete_all_involving(db, user.id)
    db.delete(user)
    db.flush()
    log.info("Deleted user %s and %d connection request(s)", user.id, removed)
