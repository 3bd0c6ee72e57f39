# mycontacts/repositories/user_repo.py
from sqlmodel import Session, select

from mycontacts.models.user import User


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return a User by unique email (exact match), or None if not found."""
        stmt = select(User).where(User.email == email)
        return session.exec(stmt).first()

    def create(self, session: Session, user: User) -> User:
        """Insert a new User and return the persisted row."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
