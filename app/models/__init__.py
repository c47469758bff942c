from app.models.user import User
from app.models.connection_request import ConnectionRequest

__all__ = ["User", "ConnectionRequest"]
