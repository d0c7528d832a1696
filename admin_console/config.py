"""Configuration management for the admin console."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Widest bounds accepted for a meal plan. Configured limits may only tighten these.
PLAN_NAME_MAX_LENGTH = 20
PLAN_MAX_CALORIES = 5000
PLAN_MAX_PROTEIN = 500
PLAN_MAX_MEALS = 10


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Remote store
    store_backend: Literal["rest", "sql"] = Field(default="sql")
    store_url: str | None = Field(default=None)
    store_api_key: str | None = Field(default=None)
    store_timeout_seconds: float = Field(default=30.0)

    # Database (sql backend)
    database_url: str = Field(default="sqlite:///./admin_console.db")

    # Plan policy
    plan_name_max_length: int = Field(default=PLAN_NAME_MAX_LENGTH)
    plan_max_calories: int = Field(default=PLAN_MAX_CALORIES)
    plan_max_protein: int = Field(default=PLAN_MAX_PROTEIN)
    plan_max_meals: int = Field(default=PLAN_MAX_MEALS)

    # Dashboard
    hydration_target_ml: int = Field(default=3000, gt=0)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def clamp_plan_policy(self) -> "Settings":
        """Keep configured plan limits inside the hard bounds."""
        self.plan_name_max_length = min(self.plan_name_max_length, PLAN_NAME_MAX_LENGTH)
        self.plan_max_calories = min(self.plan_max_calories, PLAN_MAX_CALORIES)
        self.plan_max_protein = min(self.plan_max_protein, PLAN_MAX_PROTEIN)
        self.plan_max_meals = min(self.plan_max_meals, PLAN_MAX_MEALS)
        return self

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has a usable store configuration."""
        if self.environment == "production":
            if self.store_backend == "rest" and not (self.store_url and self.store_api_key):
                raise ValueError("STORE_URL and STORE_API_KEY are required for the rest backend")
            if self.store_backend == "sql" and "localhost" in self.database_url:
                raise ValueError("DATABASE_URL should not use localhost in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
