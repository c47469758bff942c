from datetime import datetime

import bcrypt
from sqlalchemy import JSON, Boolean, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

DEFAULT_PHOTO_URL = "https://www.pngall.com/wp-content/uploads/5/Profile-PNG-File.png"
DEFAULT_ABOUT = "This developer has not written anything about themselves yet."


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    first_name: Mapped[str] = mapped_column(String(50))
    last_name: Mapped[str] = mapped_column(String(50), default="")
    password_hash: Mapped[str] = mapped_column(String(255))
    age: Mapped[int | None] = mapped_column(default=None)
    gender: Mapped[str | None] = mapped_column(String(10), default=None)
    photo_url: Mapped[str] = mapped_column(String(2048), default=DEFAULT_PHOTO_URL)
    about: Mapped[str] = mapped_column(String(1000), default=DEFAULT_ABOUT)
    skills: Mapped[list[str]] = mapped_column(JSON, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now()
    )

    def set_password(self, password: str) -> None:
        self.password_hash = bcrypt.hashpw(
            password.encode(), bcrypt.gensalt()
        ).decode()

    def check_password(self, password: str) -> bool:
        return bcrypt.checkpw(
            password.encode(), self.password_hash.encode()
        )
