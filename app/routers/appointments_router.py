from fastapi import APIRouter, Depends, HTTPException, Response
import logging

from ..config import settings
from ..application.ports.record_store import RecordStore
from ..application.services.appointments_service import AppointmentsService, BookingRequest
from ..application.services.export_service import ExportService, CSV_FILENAME
from ..exceptions import InternalError, NotFoundError, create_success_response
from ..infrastructure.persistence.json_file.record_store_json import JsonFileRecordStore
from ..infrastructure.persistence.memory.record_store_memory import InMemoryRecordStore
from ..schemas.appointments.appointment import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentDetailResponse,
    BookingCreatedResponse,
)
from ..schemas.common.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Appointments"])

_memory_store = InMemoryRecordStore()


def get_record_store() -> RecordStore:
    if settings.STORAGE_BACKEND == "memory":
        return _memory_store
    return JsonFileRecordStore(settings.DATA_FILE)


def _as_text(value):
    # numeric zero stays falsy so it is still reported as missing
    if value is None or isinstance(value, str) or not value:
        return value
    return str(value)


def get_appointments_service(store: RecordStore = Depends(get_record_store)) -> AppointmentsService:
    return AppointmentsService(store=store)


def get_export_service(store: RecordStore = Depends(get_record_store)) -> ExportService:
    return ExportService(store=store)


@router.get("/appointments", response_model=AppointmentListResponse)
def list_appointments(appt_service: AppointmentsService = Depends(get_appointments_service)):
    try:
        records = appt_service.get_all()
        return create_success_response(data=[r.to_dict() for r in records])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving appointments: {str(e)}")
        raise InternalError("Failed to retrieve appointments")


@router.get("/appointments/{reference}", response_model=AppointmentDetailResponse)
def get_appointment(reference: str, appt_service: AppointmentsService = Depends(get_appointments_service)):
    try:
        record = appt_service.get_by_reference(reference)
        if not record:
            raise NotFoundError("Appointment not found")
        return create_success_response(data=record.to_dict())
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving appointment {reference}: {str(e)}")
        raise InternalError("Failed to retrieve appointment")


@router.post("/appointments", response_model=BookingCreatedResponse, status_code=201)
def book_appointment(
    appointment_data: AppointmentCreate,
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        confirmation = appt_service.create(
            BookingRequest(
                full_name=_as_text(appointment_data.fullName),
                email=_as_text(appointment_data.email),
                phone=_as_text(appointment_data.phone),
                age=appointment_data.age,
                gender=_as_text(appointment_data.gender),
                doctor_name=_as_text(appointment_data.doctorName),
                specialization=_as_text(appointment_data.specialization),
                appointment_date=_as_text(appointment_data.appointmentDate),
                appointment_time=_as_text(appointment_data.appointmentTime),
            )
        )
        return create_success_response(
            message="Appointment booked successfully!",
            data={"id": confirmation.id, "bookingReference": confirmation.booking_reference},
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error booking appointment: {str(e)}")
        raise InternalError("Failed to book appointment")


@router.delete("/appointments/{appointment_id}", response_model=MessageResponse)
def delete_appointment(appointment_id: str, appt_service: AppointmentsService = Depends(get_appointments_service)):
    try:
        try:
            numeric_id = int(appointment_id)
        except ValueError:
            # A non-numeric id can never match a stored record
            raise NotFoundError("Appointment not found")
        appt_service.delete(numeric_id)
        return create_success_response(message="Appointment deleted successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting appointment {appointment_id}: {str(e)}")
        raise InternalError("Failed to delete appointment")


@router.get("/export")
def export_appointments(export_service: ExportService = Depends(get_export_service)):
    try:
        content = export_service.export_csv()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error exporting appointments: {str(e)}")
        raise InternalError("Failed to export appointments")
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={CSV_FILENAME}"},
    )
