"""Patient e-mail notifications.

Delivery is stubbed: the default notifier writes each message to the log.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from mindconnect.core import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    body: str


class Notifier(ABC):
    @abstractmethod
    def send(self, message: EmailMessage) -> None:
        """Deliver ``message``, raising on failure."""


class LoggingNotifier(Notifier):
    def send(self, message: EmailMessage) -> None:
        logger.info('Sending email to %s with subject: %s', message.to, message.subject)
        logger.info('Email body: %s', message.body)


def send_best_effort(notifier: Notifier, message: EmailMessage) -> bool:
    try:
        notifier.send(message)
    except Exception:
        logger.exception('Failed to send %r to %s', message.subject, message.to)
        return False
    return True


def _format_when(value: datetime) -> str:
    return value.strftime('%A, %B %d, %Y at %I:%M %p')


def confirmation_email(appointment) -> EmailMessage:
    body = (
        f'Your appointment has been scheduled for {_format_when(appointment.date)}.\n\n'
        'Appointment Details:\n'
        f'- Type: {appointment.type}\n'
        f'- Duration: {appointment.duration} minutes\n\n'
        'Join Zoom Meeting:\n'
        f'{appointment.zoom_meeting_url}\n'
        f'Password: {appointment.zoom_meeting_password}\n\n'
        f'Thank you for choosing {config.APP_NAME}!'
    )
    return EmailMessage(
        to=appointment.patient_email,
        subject=f'{config.APP_NAME}: Appointment Confirmation',
        body=body,
    )


def update_email(appointment) -> EmailMessage:
    body = (
        f'Your appointment has been updated to {_format_when(appointment.date)}.\n\n'
        f'Updated Zoom Meeting Link: {appointment.zoom_meeting_url}\n'
        f'Password: {appointment.zoom_meeting_password}'
    )
    return EmailMessage(
        to=appointment.patient_email,
        subject=f'{config.APP_NAME}: Appointment Updated',
        body=body,
    )


def cancellation_email(appointment) -> EmailMessage:
    body = (
        f'Your appointment scheduled for {_format_when(appointment.date)} has been cancelled.\n\n'
        'If you would like to reschedule, please visit our website.'
    )
    return EmailMessage(
        to=appointment.patient_email,
        subject=f'{config.APP_NAME}: Appointment Cancelled',
        body=body,
    )
