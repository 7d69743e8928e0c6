import logging
from datetime import datetime
from types import SimpleNamespace

from mindconnect.integrations.notifications import (
    EmailMessage,
    LoggingNotifier,
    Notifier,
    cancellation_email,
    confirmation_email,
    send_best_effort,
    update_email,
)


class ExplodingNotifier(Notifier):
    def send(self, message):
        raise OSError('smtp unavailable')


def _appointment() -> SimpleNamespace:
    return SimpleNamespace(
        patient_email='jordan@example.com',
        date=datetime(2025, 3, 10, 9, 0),
        type='Initial Consultation',
        duration=45,
        zoom_meeting_url='https://zoom.us/j/42',
        zoom_meeting_password='abc123',
    )


def test_logging_notifier_writes_message_to_log(caplog) -> None:
    caplog.set_level(logging.INFO)

    LoggingNotifier().send(EmailMessage(to='jordan@example.com', subject='Hello', body='Body text'))

    assert 'Sending email to jordan@example.com with subject: Hello' in caplog.text
    assert 'Body text' in caplog.text


def test_send_best_effort_swallows_delivery_failures(caplog) -> None:
    delivered = send_best_effort(ExplodingNotifier(), EmailMessage(to='a@example.com', subject='Hi', body=''))

    assert delivered is False
    assert 'Failed to send' in caplog.text


def test_send_best_effort_reports_success() -> None:
    assert send_best_effort(LoggingNotifier(), EmailMessage(to='a@example.com', subject='Hi', body='')) is True


def test_confirmation_email_includes_meeting_details() -> None:
    message = confirmation_email(_appointment())

    assert message.to == 'jordan@example.com'
    assert message.subject == 'MindConnect: Appointment Confirmation'
    assert 'Monday, March 10, 2025 at 09:00 AM' in message.body
    assert 'Duration: 45 minutes' in message.body
    assert 'https://zoom.us/j/42' in message.body
    assert 'Password: abc123' in message.body


def test_update_and_cancellation_emails() -> None:
    assert update_email(_appointment()).subject == 'MindConnect: Appointment Updated'
    assert 'has been cancelled' in cancellation_email(_appointment()).body
