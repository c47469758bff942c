from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

INTERESTED = "interested"
IGNORED = "ignored"
ACCEPTED = "accepted"
REJECTED = "rejected"

SEND_STATUSES = (INTERESTED, IGNORED)
REVIEW_STATUSES = (ACCEPTED, REJECTED)


def make_pair_key(user_a: int, user_b: int) -> str:
    """Return the direction-independent key for a pair of user ids."""
    low, high = sorted((user_a, user_b))
    return f"{low}:{high}"


def _pair_key_default(context) -> str:
    params = context.get_current_parameters()
    return make_pair_key(params["from_user_id"], params["to_user_id"])


class ConnectionRequest(Base):
    __tablename__ = "connection_requests"
    __table_args__ = (
        CheckConstraint(
            "from_user_id <> to_user_id", name="ck_connection_requests_not_self"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    from_user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    to_user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    # One record per unordered pair; covers both the ordered duplicate and
    # the reverse request.
    pair_key: Mapped[str] = mapped_column(
        String(64), unique=True, default=_pair_key_default
    )
    status: Mapped[str] = mapped_column(String(20))
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now()
    )

    def other_party(self, user_id: int) -> int:
        if self.from_user_id == user_id:
            return self.to_user_id
        return self.from_user_id
