from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import Field, field_validator
from sqlalchemy.exc import SQLAlchemyError

from mindconnect.auth.passwords import MAX_PASSWORD_BYTES, hash_password
from mindconnect.core.dependencies import get_store
from mindconnect.core.errors import storage_failure
from mindconnect.core.schemas import CamelModel
from mindconnect.routes.appointment_routes import AppointmentResponse
from mindconnect.storage import MemStorage

router = APIRouter(tags=['users'])

MIN_PASSWORD_LENGTH = 8


class CreateUserRequest(CamelModel):
    username: str
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: Literal['patient', 'admin'] = 'patient'

    @field_validator('username')
    @classmethod
    def validate_username(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Username is required.')
        return normalized

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f'Password cannot be longer than {MAX_PASSWORD_BYTES} bytes.')
        return value

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        normalized = value.strip().lower()
        if '@' not in normalized:
            raise ValueError('A valid email address is required.')
        return normalized


class UserResponse(CamelModel):
    id: int
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: str


@router.post('', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(data: CreateUserRequest, store: MemStorage = Depends(get_store)):
    try:
        if store.get_user_by_email(data.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail='User with this email already exists',
            )
        if store.get_user_by_username(data.username):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail='User with this username already exists',
            )

        record = data.model_dump(exclude={'password'})
        record['hashed_password'] = hash_password(data.password)
        return store.create_user(record)
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to create user') from exc


@router.get('/{user_id}/appointments', response_model=list[AppointmentResponse])
def list_user_appointments(user_id: int, store: MemStorage = Depends(get_store)):
    try:
        if store.get_user(user_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='User not found')
        return store.get_appointments_by_user(user_id)
    except SQLAlchemyError as exc:
        raise storage_failure('Failed to fetch appointments') from exc
