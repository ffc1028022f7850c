from datetime import datetime, timedelta, timezone

import pytest

from app.application.ports.record_store import AppointmentRecord
from app.application.services.appointments_service import (
    AppointmentsService,
    BookingRequest,
    coerce_age,
)
from app.exceptions import ValidationError, NotFoundError, PersistenceError
from app.infrastructure.persistence.memory.record_store_memory import InMemoryRecordStore


class StepClock:
    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + self.step
        return now


class FailingWriteStore(InMemoryRecordStore):
    def save(self, records) -> bool:
        return False


START = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


def make_request(**overrides) -> BookingRequest:
    data = dict(
        full_name="Jane Doe",
        email="j@x.com",
        phone="555",
        age="30",
        gender="F",
        doctor_name="Dr. Smith",
        specialization="Cardiology",
        appointment_date="2024-01-01",
        appointment_time="10:00",
    )
    data.update(overrides)
    return BookingRequest(**data)


def make_service(store=None) -> AppointmentsService:
    return AppointmentsService(store=store if store is not None else InMemoryRecordStore([]), clock=StepClock(START))


def test_create_persists_record_with_time_derived_ids():
    svc = make_service()
    out = svc.create(make_request())

    millis = 1704103200000
    assert out.id == millis
    assert out.booking_reference.startswith("HAB-")
    assert int(out.booking_reference[4:], 36) == millis
    assert out.booking_reference == out.booking_reference.upper()

    records = svc.store.load()
    assert len(records) == 1
    rec = records[0]
    assert rec.id == out.id
    assert rec.age == 30
    assert rec.full_name == "Jane Doe"
    assert rec.doctor_name == "Dr. Smith"
    assert rec.created_at == "2024-01-01T10:00:00.000Z"


def test_create_assigns_distinct_ids_across_calls():
    svc = make_service()
    a = svc.create(make_request())
    b = svc.create(make_request(full_name="John Roe"))
    assert a.id != b.id
    assert a.booking_reference != b.booking_reference
    assert len(svc.store.load()) == 2


@pytest.mark.parametrize("field_name", [
    "full_name", "email", "phone", "age", "gender",
    "doctor_name", "specialization", "appointment_date", "appointment_time",
])
def test_create_rejects_missing_field_without_writing(field_name):
    store = InMemoryRecordStore([])
    svc = make_service(store)
    svc.create(make_request())
    before = store.document

    with pytest.raises(ValidationError) as exc:
        svc.create(make_request(**{field_name: None}))
    assert exc.value.status_code == 400
    assert exc.value.message == "All fields are required"
    assert store.document == before


def test_create_rejects_blank_strings():
    svc = make_service()
    with pytest.raises(ValidationError):
        svc.create(make_request(email="   "))
    assert svc.store.load() == []


def test_create_rejects_non_numeric_age():
    svc = make_service()
    with pytest.raises(ValidationError) as exc:
        svc.create(make_request(age="thirty"))
    assert "Age" in exc.value.message
    assert svc.store.load() == []


def test_coerce_age_parses_leading_integer():
    assert coerce_age("30") == 30
    assert coerce_age(" 42 ") == 42
    assert coerce_age("30.5") == 30
    assert coerce_age(7) == 7
    with pytest.raises(ValidationError):
        coerce_age("abc")


def test_create_reports_persistence_failure():
    svc = make_service(FailingWriteStore([]))
    with pytest.raises(PersistenceError) as exc:
        svc.create(make_request())
    assert exc.value.status_code == 500


def test_delete_removes_exactly_one_record():
    svc = make_service()
    first = svc.create(make_request())
    second = svc.create(make_request(full_name="John Roe"))

    svc.delete(first.id)

    remaining = svc.store.load()
    assert len(remaining) == 1
    assert remaining[0].id == second.id


def test_delete_unknown_id_leaves_store_untouched():
    store = InMemoryRecordStore([])
    svc = make_service(store)
    svc.create(make_request())
    before = store.document

    with pytest.raises(NotFoundError):
        svc.delete(12345)
    assert store.document == before


def test_delete_reports_persistence_failure():
    record = AppointmentRecord(
        id=1, booking_reference="HAB-1", full_name="A", email="a@x.com", phone="1",
        age=20, gender="M", doctor_name="Dr. B", specialization="ENT",
        appointment_date="2024-02-01", appointment_time="09:00",
        created_at="2024-01-01T00:00:00.000Z",
    )
    svc = make_service(FailingWriteStore([record]))
    with pytest.raises(PersistenceError):
        svc.delete(1)


def test_get_all_returns_newest_first():
    svc = make_service()
    for name in ["first", "second", "third"]:
        svc.create(make_request(full_name=name))

    result = svc.get_all()
    assert [r.full_name for r in result] == ["third", "second", "first"]
    for a, b in zip(result, result[1:]):
        assert a.created_at >= b.created_at


def test_get_by_reference_matches_exactly():
    svc = make_service()
    created = svc.create(make_request())

    found = svc.get_by_reference(created.booking_reference)
    assert found is not None
    assert found.id == created.id
    assert svc.get_by_reference(created.booking_reference.lower()) is None
    assert svc.get_by_reference("HAB-NOPE") is None


@pytest.mark.parametrize("age", [float("inf"), float("-inf"), float("nan")])
def test_coerce_age_rejects_non_finite_numbers(age):
    with pytest.raises(ValidationError):
        coerce_age(age)
