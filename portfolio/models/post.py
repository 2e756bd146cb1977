"""Blog post model."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Index,
    String,
    Text,
    text,
)

from portfolio.database import Base
from portfolio.models.mixins import OwnedContentMixin

POST_STATUSES = ("published", "draft")


class Post(OwnedContentMixin, Base):
    """Markdown blog post, either published or kept as a draft."""

    __tablename__ = "posts"

    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    status = Column(String(16), nullable=False, server_default=text("'draft'"))

    __table_args__ = (
        CheckConstraint(
            "status IN ({})".format(", ".join(f"'{s}'" for s in POST_STATUSES)),
            name="ck_post_status",
        ),
        Index("idx_posts_status_created", "status", "created_at"),
    )
