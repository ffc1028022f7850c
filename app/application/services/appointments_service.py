import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, List, Optional, Union

from ...exceptions import ValidationError, NotFoundError, PersistenceError
from ..ports.record_store import RecordStore, AppointmentRecord
from .booking_reference import epoch_millis, iso_timestamp, make_booking_reference, utcnow

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "full_name",
    "email",
    "phone",
    "age",
    "gender",
    "doctor_name",
    "specialization",
    "appointment_date",
    "appointment_time",
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass
class BookingRequest:
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    age: Optional[Union[int, str]] = None
    gender: Optional[str] = None
    doctor_name: Optional[str] = None
    specialization: Optional[str] = None
    appointment_date: Optional[str] = None
    appointment_time: Optional[str] = None


@dataclass
class BookingConfirmation:
    id: int
    booking_reference: str


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    # numeric zero is falsy, matching the booking form's own check
    return not value


def coerce_age(value: Union[int, str]) -> int:
    """Parse the leading integer of an age value ("30", " 30 ", "30.5" -> 30)."""
    if isinstance(value, bool):
        raise ValidationError("Age must be a whole number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except (OverflowError, ValueError):
            # NaN and Infinity are accepted by the JSON decoder
            raise ValidationError("Age must be a whole number")
    match = _LEADING_INT.match(str(value))
    if not match:
        raise ValidationError("Age must be a whole number")
    return int(match.group(1))


def sort_newest_first(records: List[AppointmentRecord]) -> List[AppointmentRecord]:
    # created_at is fixed-width ISO-8601 UTC, so string order is chronological
    return sorted(records, key=lambda r: r.created_at or "", reverse=True)


@dataclass
class AppointmentsService:
    store: RecordStore
    clock: Callable[[], datetime] = field(default=utcnow)

    def create(self, request: BookingRequest) -> BookingConfirmation:
        if any(_is_blank(getattr(request, name)) for name in REQUIRED_FIELDS):
            raise ValidationError("All fields are required")
        age = coerce_age(request.age)

        now = self.clock()
        millis = epoch_millis(now)
        record = AppointmentRecord(
            id=millis,
            booking_reference=make_booking_reference(millis),
            full_name=request.full_name,
            email=request.email,
            phone=request.phone,
            age=age,
            gender=request.gender,
            doctor_name=request.doctor_name,
            specialization=request.specialization,
            appointment_date=request.appointment_date,
            appointment_time=request.appointment_time,
            created_at=iso_timestamp(now),
        )

        # Load-modify-store is not atomic; a concurrent writer between the
        # load and the save is overwritten.
        records = self.store.load()
        records.append(record)
        if not self.store.save(records):
            raise PersistenceError("Failed to save appointment")

        logger.info(f"Booked appointment {record.booking_reference} (id={record.id})")
        return BookingConfirmation(id=record.id, booking_reference=record.booking_reference)

    def delete(self, appointment_id: int) -> None:
        records = self.store.load()
        remaining = [r for r in records if r.id != appointment_id]
        if len(remaining) == len(records):
            raise NotFoundError("Appointment not found")
        if not self.store.save(remaining):
            raise PersistenceError("Failed to delete appointment")
        logger.info(f"Deleted appointment id={appointment_id}")

    def get_all(self) -> List[AppointmentRecord]:
        return sort_newest_first(self.store.load())

    def get_by_reference(self, reference: str) -> Optional[AppointmentRecord]:
        return next((r for r in self.store.load() if r.booking_reference == reference), None)
