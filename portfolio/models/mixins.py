"""Columns shared by every piece of owned content."""

from sqlalchemy import TIMESTAMP, Column, ForeignKey, Integer
from sqlalchemy.orm import declared_attr, relationship


class OwnedContentMixin:
    """Integer id, timestamps, and a nullable owner that survives the owner's deletion."""

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False)

    @declared_attr
    def user_id(cls):
        return Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), index=True)

    @declared_attr
    def author(cls):
        return relationship("User")
