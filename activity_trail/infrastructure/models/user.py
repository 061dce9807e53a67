"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, String

from activity_trail.infrastructure.database import Base


class UserModel(Base):
    """Application user, used here only to resolve display names."""

    __tablename__ = "user"

    id = Column(String(36), primary_key=True)
    name = Column(String(120), nullable=True)
    email = Column(String(255), nullable=False, index=True)


__all__ = ["UserModel"]
