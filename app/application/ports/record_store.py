from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, List, Protocol

_INT_FIELDS = ("id", "age")


@dataclass
class AppointmentRecord:
    id: int
    booking_reference: str
    full_name: str
    email: str
    phone: str
    age: int
    gender: str
    doctor_name: str
    specialization: str
    appointment_date: str
    appointment_time: str
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppointmentRecord":
        """Build a record from a persisted JSON object.

        Raises KeyError when a field is missing and ValueError when a value
        has the wrong type. Unknown keys are ignored.
        """
        values = {f.name: data[f.name] for f in fields(cls)}
        for name, value in values.items():
            expected = int if name in _INT_FIELDS else str
            if isinstance(value, bool) or not isinstance(value, expected):
                raise ValueError(f"{name} should be {expected.__name__}, got {type(value).__name__}")
        return cls(**values)


class RecordStore(Protocol):
    """Owner of the single persisted document holding every appointment.

    Each call hits durable storage; nothing is cached between calls, so a
    load/modify/save cycle from two callers at once is last-writer-wins.
    """

    def load(self) -> List[AppointmentRecord]:
        ...

    def save(self, records: List[AppointmentRecord]) -> bool:
        ...

    def ensure_initialized(self) -> bool:
        ...
