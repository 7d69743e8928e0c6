"""Storage for appointments, availability rules, users and Zoom settings.

Records live in an in-memory SQLite database unless ``DATABASE_URL`` points elsewhere.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from threading import Lock
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from mindconnect.database import build_engine, build_session_factory, create_schema
from mindconnect.models.appointment import Appointment
from mindconnect.models.availability import Availability
from mindconnect.models.user import User
from mindconnect.models.zoom_settings import ZoomSettings

ZOOM_SETTINGS_ID = 1
DEFAULT_BUSINESS_DAYS = range(1, 6)  # Monday-Friday, Sunday is 0
DEFAULT_HOURS = ('09:00', '17:00')


def _column_names(model: type) -> set[str]:
    return {column.key for column in inspect(model).column_attrs}


def _apply_changes(record: Any, changes: dict[str, Any]) -> None:
    allowed = _column_names(type(record)) - {'id'}
    for key, value in changes.items():
        if key in allowed:
            setattr(record, key, value)


class MemStorage:
    """Keyed record store backed by a private SQLite database.

    Lookups of unknown ids return ``None`` (or ``False`` for deletes); the
    HTTP layer turns that into a 404. Every call runs in its own session and
    is serialized by a lock.
    """

    def __init__(self, engine: Engine | None = None, seed_availability: bool = True) -> None:
        self.engine = engine or build_engine()
        self._session_factory = build_session_factory(self.engine)
        self._lock = Lock()

        create_schema(self.engine)

        if seed_availability:
            self._initialize_default_availability()

    def _initialize_default_availability(self) -> None:
        start_time, end_time = DEFAULT_HOURS
        for day in DEFAULT_BUSINESS_DAYS:
            self.create_availability({
                'day_of_week': day,
                'start_time': start_time,
                'end_time': end_time,
                'is_available': True,
            })

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with self._lock:
            db = self._session_factory()
            try:
                yield db
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    def _create(self, model: type, data: dict[str, Any]) -> Any:
        allowed = _column_names(model) - {'id'}
        record = model(**{key: value for key, value in data.items() if key in allowed})
        with self._session() as db:
            db.add(record)
            db.commit()
            db.refresh(record)
        return record

    def _update(self, model: type, record_id: int, changes: dict[str, Any]) -> Any | None:
        with self._session() as db:
            record = db.get(model, record_id)
            if record is None:
                return None
            _apply_changes(record, changes)
            db.commit()
            db.refresh(record)
        return record

    def _delete(self, model: type, record_id: int) -> bool:
        with self._session() as db:
            record = db.get(model, record_id)
            if record is None:
                return False
            db.delete(record)
            db.commit()
        return True

    # Users

    def get_user(self, user_id: int) -> User | None:
        with self._session() as db:
            return db.get(User, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with self._session() as db:
            return db.query(User).filter(User.username == username).first()

    def get_user_by_email(self, email: str) -> User | None:
        with self._session() as db:
            return db.query(User).filter(User.email == email).first()

    def create_user(self, data: dict[str, Any]) -> User:
        return self._create(User, data)

    # Appointments

    def get_appointment(self, appointment_id: int) -> Appointment | None:
        with self._session() as db:
            return db.get(Appointment, appointment_id)

    def list_appointments(self) -> list[Appointment]:
        with self._session() as db:
            return db.query(Appointment).order_by(Appointment.id.asc()).all()

    def get_appointments_by_user(self, user_id: int) -> list[Appointment]:
        with self._session() as db:
            return db.query(Appointment).filter(
                Appointment.user_id == user_id,
            ).order_by(Appointment.date.asc()).all()

    def get_appointments_by_date(self, day: date) -> list[Appointment]:
        if isinstance(day, datetime):
            day = day.date()
        day_start = datetime.combine(day, time.min)
        day_end = day_start + timedelta(days=1)

        with self._session() as db:
            return db.query(Appointment).filter(
                Appointment.date >= day_start,
                Appointment.date < day_end,
            ).order_by(Appointment.date.asc()).all()

    def get_appointments_by_date_range(self, start: datetime, end: datetime) -> list[Appointment]:
        with self._session() as db:
            return db.query(Appointment).filter(
                Appointment.date >= start,
                Appointment.date <= end,
            ).order_by(Appointment.date.asc()).all()

    def create_appointment(self, data: dict[str, Any]) -> Appointment:
        return self._create(Appointment, data)

    def update_appointment(self, appointment_id: int, changes: dict[str, Any]) -> Appointment | None:
        return self._update(Appointment, appointment_id, changes)

    def delete_appointment(self, appointment_id: int) -> bool:
        return self._delete(Appointment, appointment_id)

    # Availability rules

    def get_availability(self) -> list[Availability]:
        with self._session() as db:
            return db.query(Availability).order_by(
                Availability.day_of_week.asc(),
                Availability.id.asc(),
            ).all()

    def get_availability_rule(self, availability_id: int) -> Availability | None:
        with self._session() as db:
            return db.get(Availability, availability_id)

    def get_availability_by_day(self, day_of_week: int) -> list[Availability]:
        with self._session() as db:
            return db.query(Availability).filter(
                Availability.day_of_week == day_of_week,
            ).order_by(Availability.id.asc()).all()

    def create_availability(self, data: dict[str, Any]) -> Availability:
        return self._create(Availability, data)

    def update_availability(self, availability_id: int, changes: dict[str, Any]) -> Availability | None:
        return self._update(Availability, availability_id, changes)

    def delete_availability(self, availability_id: int) -> bool:
        return self._delete(Availability, availability_id)

    # Zoom settings

    def get_zoom_settings(self) -> ZoomSettings | None:
        with self._session() as db:
            return db.get(ZoomSettings, ZOOM_SETTINGS_ID)

    def update_zoom_settings(self, data: dict[str, Any]) -> ZoomSettings:
        with self._session() as db:
            settings = db.get(ZoomSettings, ZOOM_SETTINGS_ID)
            if settings is None:
                settings = ZoomSettings(id=ZOOM_SETTINGS_ID)
                db.add(settings)
            _apply_changes(settings, data)
            db.commit()
            db.refresh(settings)
        return settings
