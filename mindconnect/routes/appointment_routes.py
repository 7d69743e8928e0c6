from datetime import date, datetime, time, timezone
from typing import Literal

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field, field_validator, model_validator
from sqlalchemy.exc import SQLAlchemyError

from mindconnect.auth.dependencies import require_admin
from mindconnect.core import config
from mindconnect.core.dependencies import get_notifier, get_provisioner, get_store
from mindconnect.core.errors import storage_failure
from mindconnect.core.schemas import CamelModel, Questionnaire
from mindconnect.integrations.meetings import MeetingDetails, MeetingProvisioner, provision_meeting
from mindconnect.integrations.notifications import (
    Notifier,
    cancellation_email,
    confirmation_email,
    send_best_effort,
    update_email,
)
from mindconnect.scheduling import TimeSlot, format_slot_label, generate_time_slots
from mindconnect.storage import MemStorage

router = APIRouter(tags=['appointments'])

AppointmentStatus = Literal['pending', 'confirmed', 'cancelled']
NON_NULLABLE_FIELDS = ('patient_name', 'patient_email', 'date', 'duration', 'type', 'status')
UNPARSEABLE_DATE = 'Could not parse appointment date'


def parse_appointment_date(value: object) -> datetime:
    """Accept ISO-8601 strings or native values; aware times become naive UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValueError(UNPARSEABLE_DATE) from exc
    else:
        raise ValueError(UNPARSEABLE_DATE)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _normalize_email(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if not normalized:
        raise ValueError('Patient email is required.')
    return normalized


def _normalize_name(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip()
    if not normalized:
        raise ValueError('Patient name is required.')
    return normalized


class AppointmentCreate(CamelModel):
    user_id: int | None = None
    patient_name: str
    patient_email: str
    date: datetime
    duration: int = Field(default=config.DEFAULT_APPOINTMENT_DURATION, gt=0)
    type: str = config.DEFAULT_APPOINTMENT_TYPE
    status: AppointmentStatus = 'pending'
    questionnaire: Questionnaire | None = None

    @field_validator('date', mode='before')
    @classmethod
    def parse_date(cls, value: object) -> datetime:
        return parse_appointment_date(value)

    @field_validator('patient_email')
    @classmethod
    def validate_patient_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator('patient_name')
    @classmethod
    def validate_patient_name(cls, value: str) -> str:
        return _normalize_name(value)


class AppointmentUpdate(CamelModel):
    user_id: int | None = None
    patient_name: str | None = None
    patient_email: str | None = None
    date: datetime | None = None
    duration: int | None = Field(default=None, gt=0)
    type: str | None = None
    status: AppointmentStatus | None = None
    zoom_meeting_id: str | None = None
    zoom_meeting_url: str | None = None
    zoom_meeting_password: str | None = None
    questionnaire: Questionnaire | None = None

    @field_validator('date', mode='before')
    @classmethod
    def parse_date(cls, value: object) -> datetime | None:
        # Explicit nulls are reported by reject_nulls.
        if value is None:
            return None
        return parse_appointment_date(value)

    @field_validator('patient_email')
    @classmethod
    def validate_patient_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator('patient_name')
    @classmethod
    def validate_patient_name(cls, value: str) -> str:
        return _normalize_name(value)

    @model_validator(mode='after')
    def reject_nulls(self) -> 'AppointmentUpdate':
        nulls = [name for name in NON_NULLABLE_FIELDS if name in self.model_fields_set and getattr(self, name) is None]
        if nulls:
            raise ValueError(f'Fields cannot be null: {", ".join(nulls)}')
        return self


class AppointmentResponse(CamelModel):
    id: int
    user_id: int | None = None
    patient_name: str
    patient_email: str
    date: datetime
    duration: int
    type: str
    status: str
    zoom_meeting_id: str | None = None
    zoom_meeting_url: str | None = None
    zoom_meeting_password: str | None = None
    questionnaire: Questionnaire | None = None


class AvailableTimesResponse(BaseModel):
    date: date
    unavailable_times: list[str]
    slots: list[TimeSlot]


def meeting_topic(appointment_type: str) -> str:
    return f'{config.APP_NAME} Appointment - {appointment_type}'


def meeting_fields(meeting: MeetingDetails) -> dict[str, str]:
    return {
        'zoom_meeting_id': meeting.meeting_id,
        'zoom_meeting_url': meeting.join_url,
        'zoom_meeting_password': meeting.password,
    }


def get_available_times(day: date, store: MemStorage) -> AvailableTimesResponse:
    booked = store.get_appointments_by_date(day)
    unavailable_times = [format_slot_label(appointment.date) for appointment in booked]
    slots = generate_time_slots(
        config.BUSINESS_START_HOUR,
        config.BUSINESS_END_HOUR,
        config.SLOT_INTERVAL_MINUTES,
        unavailable_times,
    )
    return AvailableTimesResponse(date=day, unavailable_times=unavailable_times, slots=slots)


@router.get('', response_model=list[AppointmentResponse])
def list_appointments(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    store: MemStorage = Depends(get_store),
):
    try:
        if start is None and end is None:
            return store.list_appointments()

        range_start = datetime.combine(start or date.min, time.min)
        range_end = datetime.combine(end or date.max, time.max)
        return store.get_appointments_by_date_range(range_start, range_end)
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to fetch appointments') from exc


@router.get('/available-times', response_model=AvailableTimesResponse)
def available_times(
    day: date = Query(..., alias='date'),
    store: MemStorage = Depends(get_store),
):
    try:
        return get_available_times(day, store)
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to fetch available times') from exc


@router.get('/{appointment_id}', response_model=AppointmentResponse)
def get_appointment(appointment_id: int, store: MemStorage = Depends(get_store)):
    try:
        appointment = store.get_appointment(appointment_id)
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to fetch appointment') from exc

    if appointment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Appointment not found')
    return appointment


@router.post('', response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
    data: AppointmentCreate,
    background_tasks: BackgroundTasks,
    store: MemStorage = Depends(get_store),
    provisioner: MeetingProvisioner = Depends(get_provisioner),
    notifier: Notifier = Depends(get_notifier),
):
    meeting = provision_meeting(provisioner, meeting_topic(data.type), data.date, data.duration)

    record = data.model_dump(exclude={'questionnaire'})
    if data.questionnaire is not None:
        record['questionnaire'] = data.questionnaire.model_dump(by_alias=True)
    record.update(meeting_fields(meeting))

    try:
        appointment = store.create_appointment(record)
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to create appointment') from exc

    background_tasks.add_task(send_best_effort, notifier, confirmation_email(appointment))
    return appointment


@router.patch('/{appointment_id}', response_model=AppointmentResponse)
def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    background_tasks: BackgroundTasks,
    store: MemStorage = Depends(get_store),
    provisioner: MeetingProvisioner = Depends(get_provisioner),
    notifier: Notifier = Depends(get_notifier),
    _admin: dict | None = Depends(require_admin),
):
    changes = data.model_dump(exclude_unset=True, exclude={'questionnaire'})
    if 'questionnaire' in data.model_fields_set:
        changes['questionnaire'] = data.questionnaire.model_dump(by_alias=True) if data.questionnaire else None

    try:
        existing = store.get_appointment(appointment_id)
        if existing is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Appointment not found')

        rescheduled = changes.get('date') is not None
        if rescheduled:
            meeting = provision_meeting(
                provisioner,
                meeting_topic(changes.get('type') or existing.type),
                changes['date'],
                changes.get('duration') or existing.duration,
            )
            changes.update(meeting_fields(meeting))

        appointment = store.update_appointment(appointment_id, changes)
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to update appointment') from exc

    if appointment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Appointment not found')

    if rescheduled:
        background_tasks.add_task(send_best_effort, notifier, update_email(appointment))
    return appointment


@router.delete('/{appointment_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_appointment(
    appointment_id: int,
    background_tasks: BackgroundTasks,
    store: MemStorage = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
    _admin: dict | None = Depends(require_admin),
):
    try:
        appointment = store.get_appointment(appointment_id)
        if appointment is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Appointment not found')

        deleted = store.delete_appointment(appointment_id)
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to delete appointment') from exc

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Appointment not found')

    background_tasks.add_task(send_best_effort, notifier, cancellation_email(appointment))
