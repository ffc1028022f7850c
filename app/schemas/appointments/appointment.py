# app/schemas/appointment.py
from pydantic import BaseModel, ConfigDict
from typing import List, Optional, Union

# Form values may arrive as JSON numbers (e.g. a phone typed as digits)
FormValue = Union[str, int, float]


class AppointmentCreate(BaseModel):
    """Booking form payload. Fields are optional here so missing ones reach
    the service and come back as a single 'All fields are required' error."""
    model_config = ConfigDict(extra="ignore")

    fullName: Optional[FormValue] = None
    email: Optional[FormValue] = None
    phone: Optional[FormValue] = None
    age: Optional[Union[int, float, str]] = None
    gender: Optional[FormValue] = None
    doctorName: Optional[FormValue] = None
    specialization: Optional[FormValue] = None
    appointmentDate: Optional[FormValue] = None
    appointmentTime: Optional[FormValue] = None


class AppointmentRecordResponse(BaseModel):
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


class AppointmentListResponse(BaseModel):
    success: bool = True
    data: List[AppointmentRecordResponse]


class AppointmentDetailResponse(BaseModel):
    success: bool = True
    data: AppointmentRecordResponse


class BookingCreatedData(BaseModel):
    id: int
    bookingReference: str


class BookingCreatedResponse(BaseModel):
    success: bool = True
    message: str
    data: BookingCreatedData
