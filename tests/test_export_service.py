from app.application.ports.record_store import AppointmentRecord
from app.application.services.export_service import ExportService, render_csv
from app.infrastructure.persistence.memory.record_store_memory import InMemoryRecordStore

HEADER = "Booking Reference,Full Name,Email,Phone,Age,Gender,Doctor,Specialization,Date,Time,Created At"


def make_record(id: int, created_at: str, full_name: str = "Jane Doe", doctor_name: str = "Dr. Smith") -> AppointmentRecord:
    return AppointmentRecord(
        id=id,
        booking_reference=f"HAB-{id}",
        full_name=full_name,
        email="j@x.com",
        phone="555",
        age=30,
        gender="F",
        doctor_name=doctor_name,
        specialization="Cardiology",
        appointment_date="2024-01-01",
        appointment_time="10:00",
        created_at=created_at,
    )


def test_empty_collection_renders_header_only():
    assert render_csv([]) == HEADER


def test_row_layout_quotes_name_columns():
    out = render_csv([make_record(1, "2024-01-01T10:00:00.000Z", full_name="Doe, Jane")])
    lines = out.split("\n")
    assert lines[0] == HEADER
    assert lines[1] == (
        'HAB-1,"Doe, Jane",j@x.com,555,30,F,"Dr. Smith",Cardiology,'
        "2024-01-01,10:00,2024-01-01T10:00:00.000Z"
    )


def test_export_sorts_newest_first_with_one_line_per_record():
    store = InMemoryRecordStore([
        make_record(1, "2024-01-01T08:00:00.000Z"),
        make_record(3, "2024-01-03T08:00:00.000Z"),
        make_record(2, "2024-01-02T08:00:00.000Z"),
    ])
    lines = ExportService(store=store).export_csv().split("\n")

    assert len(lines) == 1 + 3
    assert [line.split(",")[0] for line in lines[1:]] == ["HAB-3", "HAB-2", "HAB-1"]


def test_unquoted_fields_are_not_escaped():
    record = make_record(1, "2024-01-01T08:00:00.000Z")
    record.specialization = "Ear, Nose"
    row = render_csv([record]).split("\n")[1]
    assert ",Ear, Nose," in row
