import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from mindconnect.core import config
from mindconnect.core.errors import request_validation_exception_handler
from mindconnect.integrations.meetings import MeetingProvisioner, SimulatedZoomProvisioner
from mindconnect.integrations.notifications import LoggingNotifier, Notifier
from mindconnect.routes import (
    appointment_routes,
    auth_routes,
    availability_routes,
    intake_routes,
    settings_routes,
    user_routes,
)
from mindconnect.storage import MemStorage

logger = logging.getLogger(__name__)


def create_app(
    store: MemStorage | None = None,
    provisioner: MeetingProvisioner | None = None,
    notifier: Notifier | None = None,
) -> FastAPI:
    logging.basicConfig(level=config.LOG_LEVEL.upper())
    config.validate_runtime_config()

    app = FastAPI(title=f'{config.APP_NAME} Scheduling API')

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    app.state.store = store or MemStorage()
    app.state.provisioner = provisioner or SimulatedZoomProvisioner()
    app.state.notifier = notifier or LoggingNotifier()

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

    @app.get('/api/health')
    def health():
        return {'status': 'healthy'}

    app.include_router(appointment_routes.router, prefix='/api/appointments')
    app.include_router(availability_routes.router, prefix='/api/availability')
    app.include_router(settings_routes.router, prefix='/api')
    app.include_router(intake_routes.router, prefix='/api')
    app.include_router(user_routes.router, prefix='/api/users')
    app.include_router(auth_routes.router, prefix='/api/admin')

    logger.info('%s API ready', config.APP_NAME)
    return app


app = create_app()
