"""SQLAlchemy models exposed by the backend."""
from .base import Base
from .user import User

__all__ = ["Base", "User"]
