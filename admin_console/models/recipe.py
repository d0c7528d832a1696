"""Recipe model."""

from sqlalchemy import Column, String, Text

from admin_console.database import Base
from admin_console.models.mixins import IdMixin, TimestampMixin


class Recipe(Base, IdMixin, TimestampMixin):
    """Recipe in the catalog. The console only counts these."""

    __tablename__ = "recipes"

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
