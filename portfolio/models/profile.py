"""Bio and social media models for the homepage header."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    String,
    Text,
)

from portfolio.database import Base
from portfolio.models.mixins import OwnedContentMixin

SOCIAL_PLATFORMS = ("x", "bluesky", "github", "instagram")


class Bio(OwnedContentMixin, Base):
    """
    Owner bio.

    Conceptually one current row per owner; the dashboard upserts it by id.
    """

    __tablename__ = "bio"

    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    avatar = Column(Text)


class SocialMedia(OwnedContentMixin, Base):
    """A link to one of the owner's social media profiles."""

    __tablename__ = "social_media"

    platform = Column(String(32), nullable=False)
    url = Column(Text, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "platform IN ({})".format(", ".join(f"'{p}'" for p in SOCIAL_PLATFORMS)),
            name="ck_social_media_platform",
        ),
    )
