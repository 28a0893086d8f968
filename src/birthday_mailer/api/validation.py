"""
API Request Validation.

Uses Pydantic for request payload validation.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from birthday_mailer.core.exceptions import MalformedRequestError


class BirthdayReminderRequest(BaseModel):
    """Request body for /sendemail. Keys are camelCase on the wire."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[str] = Field(default=None, description="Birthday record id")
    user_id: str = Field(
        ...,
        alias="userId",
        min_length=1,
        max_length=255,
        description="Identity store id of the user to remind",
    )
    month: Optional[int] = Field(default=None, ge=1, le=12)
    day: Optional[int] = Field(default=None, ge=1, le=31)
    next_birthday: int = Field(
        ...,
        alias="nextBirthday",
        description="Epoch milliseconds of the next occurrence",
    )
    name: str = Field(..., max_length=255)
    last_name: Optional[str] = Field(default="", alias="lastName", max_length=255)
    on_day: bool = Field(default=False, alias="onDay")
    day_before: bool = Field(default=False, alias="dayBefore")
    one_week_before: bool = Field(default=False, alias="oneWeekBefore")
    two_weeks_before: bool = Field(default=False, alias="twoWeeksBefore")

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("userId cannot be empty or whitespace")
        return v

    @field_validator("next_birthday")
    @classmethod
    def validate_next_birthday(cls, v: int) -> int:
        """Reject timestamps that do not map to a calendar date."""
        try:
            datetime.fromtimestamp(v / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"nextBirthday is not a valid timestamp: {v}") from e
        return v

    @field_validator("last_name")
    @classmethod
    def normalize_last_name(cls, v: Optional[str]) -> str:
        return v or ""


def parse_reminder_request(data: Any) -> BirthdayReminderRequest:
    """
    Validate a decoded JSON body.

    Raises:
        MalformedRequestError: If the body is not an object of the expected shape.
    """
    if not isinstance(data, dict):
        raise MalformedRequestError("body", "expected a JSON object")

    try:
        return BirthdayReminderRequest.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "body"
        raise MalformedRequestError(field, first["msg"]) from e
