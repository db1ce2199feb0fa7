from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Union

from loguru import logger

from data_store import ReservationStore
from exceptions import NotFoundError, ValidationError
from models import (
    DEFAULT_PHONE,
    DEFAULT_REQUESTS,
    REQUIRED_FIELDS,
    Reservation,
    ReservationRequest,
)
from templating import format_date, format_timestamp, render


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------- Service ----------------
class ReservationService:
    """Validate, store and read back reservations."""

    def __init__(self, store: ReservationStore, clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.clock = clock

    def submit(self, payload: Union[ReservationRequest, Mapping[str, Any]]) -> Reservation:
        if not isinstance(payload, ReservationRequest):
            payload = ReservationRequest.model_validate(payload)

        missing = [f for f in REQUIRED_FIELDS if not getattr(payload, f)]
        if missing:
            logger.warning(f"Rejected reservation, missing fields: {missing}")
            raise ValidationError(missing=missing)

        def build(reservation_id: int) -> Reservation:
            return Reservation(
                id=reservation_id,
                name=payload.name,
                email=payload.email,
                phone=payload.phone or DEFAULT_PHONE,
                date=payload.date,
                time=payload.time,
                guests=payload.guests,
                requests=payload.requests or DEFAULT_REQUESTS,
                created_at=self.clock(),
            )

        reservation = self.store.add(build)
        logger.info(
            f"Reservation #{reservation.id} created for {reservation.name} "
            f"on {reservation.date} {reservation.time} ({reservation.guests} guests)"
        )
        return reservation

    def list(self) -> List[Reservation]:
        return self.store.all()

    def get(self, reservation_id: int) -> Reservation:
        reservation = self.store.find_by_id(reservation_id)
        if reservation is None:
            raise NotFoundError()
        return reservation

    def admin_rows(self) -> List[Dict[str, Any]]:
        """Rows for the operator table, in creation order."""
        return [
            {
                "id": r.id,
                "name": r.name,
                "email": r.email,
                "date": format_date(r.date),
                "time": r.time,
                "guests": r.guests,
                "received": format_timestamp(r.created_at),
            }
            for r in self.list()
        ]

    def render_admin_view(self, title: str = "Rakugaki") -> str:
        rows = self.admin_rows()
        return render("admin.html", title=title, rows=rows, total=len(rows))
