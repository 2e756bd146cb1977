"""Project model."""

from sqlalchemy import TIMESTAMP, Column, Text

from portfolio.database import Base
from portfolio.models.mixins import OwnedContentMixin


class Project(OwnedContentMixin, Base):
    """A project shown on the homepage, dated and linked."""

    __tablename__ = "projects"

    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    date = Column(TIMESTAMP(timezone=True), nullable=False)
    url = Column(Text, nullable=False)
