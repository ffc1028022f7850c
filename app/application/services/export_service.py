from dataclasses import dataclass
from typing import Any, List

from ..ports.record_store import RecordStore, AppointmentRecord
from .appointments_service import sort_newest_first

CSV_HEADERS = [
    "Booking Reference",
    "Full Name",
    "Email",
    "Phone",
    "Age",
    "Gender",
    "Doctor",
    "Specialization",
    "Date",
    "Time",
    "Created At",
]
CSV_FILENAME = "appointments.csv"
LINE_TERMINATOR = "\n"


def _plain(value: Any) -> str:
    return "" if value is None else str(value)


def _quoted(value: Any) -> str:
    # Only wraps in quotes; embedded quotes are not escaped
    return f'"{_plain(value)}"'


def render_row(record: AppointmentRecord) -> str:
    return ",".join([
        _plain(record.booking_reference),
        _quoted(record.full_name),
        _plain(record.email),
        _plain(record.phone),
        _plain(record.age),
        _plain(record.gender),
        _quoted(record.doctor_name),
        _plain(record.specialization),
        _plain(record.appointment_date),
        _plain(record.appointment_time),
        _plain(record.created_at),
    ])


def render_csv(records: List[AppointmentRecord]) -> str:
    """Render records as CSV text, header first, in the order given.

    Name columns are quoted, every other value is written as-is, so a comma
    inside e.g. a specialization will shift the columns of that row.
    """
    lines = [",".join(CSV_HEADERS)]
    lines.extend(render_row(r) for r in records)
    return LINE_TERMINATOR.join(lines)


@dataclass
class ExportService:
    store: RecordStore

    def export_csv(self) -> str:
        return render_csv(sort_newest_first(self.store.load()))
