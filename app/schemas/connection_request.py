from datetime import datetime

from pydantic import BaseModel

from app.schemas.user import UserPublic


class ConnectionRequestRead(BaseModel):
    id: int
    from_user_id: int
    to_user_id: int
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class IncomingRequestRead(BaseModel):
    id: int
    status: str
    from_user: UserPublic
    created_at: datetime

    model_config = {"from_attributes": True}


class FeedPage(BaseModel):
    items: list[UserPublic]
    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_next_page: bool
