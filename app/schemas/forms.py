import datetime as dt

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictStr, field_validator


class SubmissionBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class BookingSubmission(SubmissionBase):
    first_name: StrictStr = Field(..., alias="firstName", min_length=1, max_length=50)
    last_name: StrictStr = Field(..., alias="lastName", min_length=1, max_length=50)
    date: dt.date
    time: StrictStr = Field(..., min_length=1, max_length=20)

    @field_validator("date", mode="before")
    @classmethod
    def parse_iso_date(cls, value):
        """Accept an ISO-8601 date or date-time and keep the calendar date."""
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, dt.date):
            return value
        if not isinstance(value, str) or not value.strip():
            raise ValueError("date must be an ISO-8601 string")
        text = value.strip()
        try:
            return dt.date.fromisoformat(text)
        except ValueError:
            pass
        if text[-1] in "Zz":
            text = text[:-1] + "+00:00"
        return dt.datetime.fromisoformat(text).date()


class ContactSubmission(SubmissionBase):
    name: StrictStr = Field(..., min_length=1, max_length=100)
    message: StrictStr = Field(..., min_length=10, max_length=2000)


class SubmissionResponse(BaseModel):
    success: bool
    message: str
