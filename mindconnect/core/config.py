import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
APP_NAME = os.getenv("APP_NAME", "MindConnect")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Empty in-memory SQLite database; every restart starts fresh.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")

CORS_ORIGINS = _get_list(os.getenv("CORS_ORIGINS"), ["http://localhost:5173"])

BUSINESS_START_HOUR = int(os.getenv("BUSINESS_START_HOUR", "9"))
BUSINESS_END_HOUR = int(os.getenv("BUSINESS_END_HOUR", "17"))
SLOT_INTERVAL_MINUTES = int(os.getenv("SLOT_INTERVAL_MINUTES", "60"))
DEFAULT_APPOINTMENT_DURATION = int(os.getenv("DEFAULT_APPOINTMENT_DURATION", "45"))
DEFAULT_APPOINTMENT_TYPE = os.getenv("DEFAULT_APPOINTMENT_TYPE", "Initial Consultation")

ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "change-me")
ADMIN_AUTH_REQUIRED = _get_bool(os.getenv("ADMIN_AUTH_REQUIRED"), default=False)

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "60"))

def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production":
        if JWT_SECRET_KEY == "change-me":
            raise RuntimeError("JWT_SECRET_KEY must be set in production.")
        if ADMIN_PASSWORD == "change-me":
            raise RuntimeError("ADMIN_PASSWORD must be set in production.")
    if BUSINESS_START_HOUR >= BUSINESS_END_HOUR:
        raise RuntimeError("BUSINESS_START_HOUR must be earlier than BUSINESS_END_HOUR.")
