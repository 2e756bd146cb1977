"""Work experience model."""

from sqlalchemy import TIMESTAMP, Column, Text

from portfolio.database import Base
from portfolio.models.mixins import OwnedContentMixin


class Experience(OwnedContentMixin, Base):
    """
    A position held at a company.

    ``end_date`` is NULL while the position is ongoing.
    """

    __tablename__ = "experiences"

    title = Column(Text, nullable=False)
    company = Column(Text, nullable=False)
    company_url = Column(Text)
    start_date = Column(TIMESTAMP(timezone=True), nullable=False)
    end_date = Column(TIMESTAMP(timezone=True))
    description = Column(Text, nullable=False)
