"""Profile schemas."""

from typing import Any, ClassVar

from pydantic import BaseModel, field_validator

UNKNOWN_USER = "Unknown User"
NO_EMAIL = "No Email"


class ProfileRow(BaseModel):
    """Row of profiles. Missing names and emails fall back to placeholders."""

    COLUMNS: ClassVar[tuple[str, ...]] = ("id", "full_name", "email")

    id: str
    full_name: str = UNKNOWN_USER
    email: str = NO_EMAIL

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("full_name", mode="before")
    @classmethod
    def default_full_name(cls, value: Any) -> Any:
        return value or UNKNOWN_USER

    @field_validator("email", mode="before")
    @classmethod
    def default_email(cls, value: Any) -> Any:
        return value or NO_EMAIL


class UserView(ProfileRow):
    """Profile annotated with the name of the user's active plan."""

    active_plan_name: str | None = None
