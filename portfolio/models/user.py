"""User model."""

from sqlalchemy import (
    TIMESTAMP,
    Column,
    Integer,
    String,
    Text,
    text,
)

from portfolio.database import Base


class User(Base):
    """
    Owner account.

    Rows are provisioned out of band; GitHub logins are matched against
    ``email`` and refresh ``name``/``avatar`` on every successful login.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(String, unique=True, nullable=False)
    avatar = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=text("CURRENT_TIMESTAMP"))
