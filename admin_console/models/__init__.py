"""SQLAlchemy models."""

from admin_console.models.logs import NutritionLog, WaterIntake
from admin_console.models.meal_plan import MealPlan, UserMealPlan
from admin_console.models.profile import Profile
from admin_console.models.recipe import Recipe

__all__ = [
    "MealPlan",
    "UserMealPlan",
    "Profile",
    "NutritionLog",
    "WaterIntake",
    "Recipe",
]
