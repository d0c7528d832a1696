"""Nutrition and water intake log models."""

from sqlalchemy import Column, Float, ForeignKey, String

from admin_console.database import Base
from admin_console.models.mixins import IdMixin, TimestampMixin


class NutritionLog(Base, IdMixin, TimestampMixin):
    """Calories logged by a user for a meal."""

    __tablename__ = "nutrition_logs"

    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=True, index=True)
    calories = Column(Float, nullable=True)


class WaterIntake(Base, IdMixin, TimestampMixin):
    """Water logged by a user."""

    __tablename__ = "water_intake"

    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=True, index=True)
    amount_ml = Column(Float, nullable=True)
