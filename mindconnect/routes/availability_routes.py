import re
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from pydantic import Field, field_validator, model_validator
from sqlalchemy.exc import SQLAlchemyError

from mindconnect.auth.dependencies import require_admin
from mindconnect.core.dependencies import get_store
from mindconnect.core.errors import storage_failure
from mindconnect.core.schemas import CamelModel
from mindconnect.scheduling import get_available_dates
from mindconnect.storage import MemStorage

router = APIRouter(tags=['availability'])

CLOCK_TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')


def validate_clock_time(value: str | None) -> str | None:
    if value is None:
        return None

    normalized = value.strip()
    if not CLOCK_TIME_PATTERN.match(normalized):
        raise ValueError('Times must use 24-hour HH:MM format.')
    return normalized


def ensure_time_order(start_time: str | None, end_time: str | None) -> None:
    # Zero-padded HH:MM strings sort chronologically.
    if start_time is not None and end_time is not None and start_time >= end_time:
        raise ValueError('Start time must be earlier than end time.')


class AvailabilityHours(CamelModel):
    start_time: str
    end_time: str
    is_available: bool = True

    @field_validator('start_time', 'end_time')
    @classmethod
    def validate_times(cls, value: str) -> str:
        return validate_clock_time(value)

    @model_validator(mode='after')
    def validate_order(self) -> 'AvailabilityHours':
        ensure_time_order(self.start_time, self.end_time)
        return self


class AvailabilityCreate(AvailabilityHours):
    day_of_week: int = Field(ge=0, le=6)


class AvailabilityUpdate(CamelModel):
    day_of_week: int | None = Field(default=None, ge=0, le=6)
    start_time: str | None = None
    end_time: str | None = None
    is_available: bool | None = None

    @field_validator('start_time', 'end_time')
    @classmethod
    def validate_times(cls, value: str | None) -> str | None:
        return validate_clock_time(value)


class AvailabilityResponse(CamelModel):
    id: int
    day_of_week: int
    start_time: str
    end_time: str
    is_available: bool | None = True


def serialize_rules(rules) -> list[dict]:
    return [AvailabilityResponse.model_validate(rule).model_dump(by_alias=True) for rule in rules]


def resolve_available_dates(start: date, end: date) -> list[str]:
    return [available.isoformat() for available in get_available_dates(start, end)]


@router.get('')
def list_availability(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    store: MemStorage = Depends(get_store),
):
    if start is not None or end is not None:
        if start is None or end is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail='Both start and end dates are required.',
            )
        return {'available_dates': resolve_available_dates(start, end)}

    try:
        return serialize_rules(store.get_availability())
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to fetch availability') from exc


@router.post('', response_model=AvailabilityResponse, status_code=status.HTTP_201_CREATED)
def create_availability(
    data: AvailabilityCreate,
    store: MemStorage = Depends(get_store),
    _admin: dict | None = Depends(require_admin),
):
    try:
        return store.create_availability(data.model_dump())
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to create availability') from exc


@router.get('/{day}', response_model=list[AvailabilityResponse])
def get_availability_for_day(
    day: int = Path(ge=0, le=6),
    store: MemStorage = Depends(get_store),
):
    try:
        return store.get_availability_by_day(day)
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to fetch availability') from exc


@router.post('/{day}', response_model=AvailabilityResponse)
def set_availability_for_day(
    data: AvailabilityHours,
    day: int = Path(ge=0, le=6),
    store: MemStorage = Depends(get_store),
    _admin: dict | None = Depends(require_admin),
):
    """Replace the weekday's hours, creating the rule when the day has none."""
    try:
        existing = store.get_availability_by_day(day)
        if existing:
            return store.update_availability(existing[0].id, data.model_dump())
        return store.create_availability({**data.model_dump(), 'day_of_week': day})
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to update availability') from exc


@router.patch('/{availability_id}', response_model=AvailabilityResponse)
def update_availability(
    availability_id: int,
    data: AvailabilityUpdate,
    store: MemStorage = Depends(get_store),
    _admin: dict | None = Depends(require_admin),
):
    changes = data.model_dump(exclude_unset=True)
    if any(changes.get(name) is None for name in ('day_of_week', 'start_time', 'end_time') if name in changes):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Day and times cannot be null.',
        )

    try:
        existing = store.get_availability_rule(availability_id)
        if existing is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Availability not found')

        try:
            ensure_time_order(
                changes.get('start_time', existing.start_time),
                changes.get('end_time', existing.end_time),
            )
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

        availability = store.update_availability(availability_id, changes)
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to update availability') from exc

    if availability is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Availability not found')
    return availability


@router.delete('/{availability_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_availability(
    availability_id: int,
    store: MemStorage = Depends(get_store),
    _admin: dict | None = Depends(require_admin),
):
    try:
        deleted = store.delete_availability(availability_id)
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to delete availability') from exc

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Availability not found')
