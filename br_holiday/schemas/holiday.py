from pydantic import BaseModel, ConfigDict, Field, field_validator

from br_holiday.utils.validation import (
    CALENDAR_DATE_PATTERN,
    InvalidDateError,
    normalize_date,
    parse_iso_timestamp,
)


class Holiday(BaseModel):
    """A single Brazilian holiday."""

    model_config = ConfigDict(frozen=True)

    date: str = Field(..., description="Calendar date in YYYY-MM-DD format")
    name: str = Field(..., min_length=1, description="Holiday name in Portuguese")
    type: str = Field("national", description="Holiday category (e.g. national)")

    @field_validator("date", mode="before")
    @classmethod
    def normalize_record_date(cls, v):
        """Store every record date in the same form ``normalize_date`` produces."""
        # Provider timestamps keep their own calendar date, no timezone shift
        if isinstance(v, str):
            text = v.strip()
            if len(text) > 10 and CALENDAR_DATE_PATTERN.match(text[:10]):
                try:
                    parse_iso_timestamp(text)
                except ValueError:
                    pass
                else:
                    v = text[:10]
        try:
            return normalize_date(v)
        except InvalidDateError as e:
            raise ValueError(f"Invalid holiday date: {v!r}") from e

    @field_validator("type", mode="before")
    @classmethod
    def default_missing_type(cls, v):
        return v or "national"
