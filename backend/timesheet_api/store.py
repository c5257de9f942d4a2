"""Credential store: lookups and inserts against the ``users`` table."""
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .errors import ConstraintViolation
from .models import User


class UserStore:
    """Single-statement access to user rows over one session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_username(self, username: str) -> User | None:
        result = await self.session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def find_by_username_or_email(self, username: str, email: str) -> list[User]:
        """Return every user whose username or email collides with the given ones."""

        result = await self.session.execute(
            select(User).where(or_(User.username == username, User.email == email))
        )
        return list(result.scalars().all())

    async def find_by_id(self, user_id: int) -> User | None:
        return await self.session.get(User, user_id)

    async def insert(
        self,
        username: str,
        email: str,
        password_hash: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        """Insert and commit a new user.

        Raises ConstraintViolation if the username or email is already taken.
        """

        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
        )
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConstraintViolation(str(exc.orig)) from exc
        await self.session.refresh(user)
        return user
