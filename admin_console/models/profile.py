"""Profile model."""

from sqlalchemy import Column, String

from admin_console.database import Base
from admin_console.models.mixins import IdMixin, TimestampMixin


class Profile(Base, IdMixin, TimestampMixin):
    """End user of the consumer app, as seen by operators."""

    __tablename__ = "profiles"

    full_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True, index=True)
