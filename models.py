from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PHONE = "Not provided"
DEFAULT_REQUESTS = "None"

REQUIRED_FIELDS = ("name", "email", "date", "time", "guests")


# ---------------- Models ----------------
class ReservationRequest(BaseModel):
    """Inbound form body. Presence is checked by the intake service, not here."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    guests: Optional[Union[int, str]] = None
    requests: Optional[str] = None

    @field_validator("name", "email", "phone", "date", "time", "requests", mode="before")
    @classmethod
    def numbers_as_text(cls, v):
        # zero stays falsy so it is reported as missing
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v) if v else None
        return v


class Reservation(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    email: str
    phone: str = DEFAULT_PHONE
    date: str
    time: str
    guests: Union[int, str]
    requests: str = DEFAULT_REQUESTS
    created_at: datetime = Field(alias="createdAt")


class ReservationCreated(BaseModel):
    message: str = "Reservation created successfully"
    reservationId: int
    reservation: Reservation
