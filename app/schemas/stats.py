from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, NonNegativeInt, StrictFloat, StrictInt, field_validator

WINDOW_DAYS = 7


def _empty_window() -> list[int]:
    return [0] * WINDOW_DAYS


class StatsSnapshot(BaseModel):
    """Focus stats as kept in durable storage.

    Serialized by alias (camelCase) so the stored JSON matches what the
    browser timer has always written under the same key.
    """

    sessions_today: NonNegativeInt = Field(default=0, alias="sessionsToday")
    total_minutes_today: NonNegativeInt = Field(default=0, alias="totalMinutesToday")
    streak: NonNegativeInt = 0
    last_session_date: str | None = Field(default=None, alias="lastSessionDate")
    weekly_data: list[NonNegativeInt] = Field(
        default_factory=_empty_window,
        alias="weeklyData",
        min_length=WINDOW_DAYS,
        max_length=WINDOW_DAYS,
    )
    # Day the last weekly_data slot describes after reconciliation; never stored
    window_date: str | None = Field(default=None, alias="windowDate", exclude=True)

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("last_session_date", "window_date")
    @classmethod
    def _calendar_day(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if date.fromisoformat(value).isoformat() != value:
            raise ValueError(f"expected YYYY-MM-DD, got {value!r}")
        return value


class SessionCompleted(BaseModel):
    duration_minutes: StrictInt | StrictFloat = Field(alias="durationMinutes")
    completed_at: datetime = Field(default_factory=datetime.now, alias="completedAt")
    type: Literal["focus", "short-break", "long-break"] = "focus"

    model_config = {"populate_by_name": True}


class DailyMinutes(BaseModel):
    date: date
    minutes: int


class StatsResponse(BaseModel):
    sessions_today: int
    total_minutes_today: int
    streak: int
    last_session_date: date | None
    weekly_data: list[int]
    week_total_minutes: int
    daily_breakdown: list[DailyMinutes]
