"""Meal plan and assignment models."""

from sqlalchemy import Column, ForeignKey, Integer, String

from admin_console.database import Base
from admin_console.models.mixins import IdMixin, TimestampMixin


class MealPlan(Base, IdMixin, TimestampMixin):
    """Meal plan template that users can be assigned to."""

    __tablename__ = "meal_plans"

    name = Column(String(20), nullable=False)
    calories = Column(Integer, nullable=False, default=0)  # Daily calorie target
    protein = Column(Integer, nullable=False, default=0)  # Protein target in grams
    meals = Column(Integer, nullable=False, default=0)


class UserMealPlan(Base, IdMixin, TimestampMixin):
    """The single active plan of a user."""

    __tablename__ = "user_meal_plans"

    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, unique=True)
    # No ON DELETE CASCADE: deleting a plan that is still assigned is rejected
    plan_id = Column(String(36), ForeignKey("meal_plans.id"), nullable=False, index=True)
