from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from mindconnect.database import build_engine
from mindconnect.integrations.meetings import MeetingDetails, MeetingProvisioner
from mindconnect.integrations.notifications import EmailMessage, Notifier
from mindconnect.main import create_app
from mindconnect.storage import MemStorage


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.messages: list[EmailMessage] = []

    def send(self, message: EmailMessage) -> None:
        self.messages.append(message)


class FixedProvisioner(MeetingProvisioner):
    def __init__(self) -> None:
        self.calls: list[tuple[str, datetime, int]] = []

    def create_meeting(self, topic: str, start_time: datetime, duration: int) -> MeetingDetails:
        self.calls.append((topic, start_time, duration))
        return MeetingDetails(
            meeting_id='zoom-42',
            join_url='https://zoom.us/j/42',
            password='abc123',
        )


@pytest.fixture
def store() -> MemStorage:
    return MemStorage(build_engine('sqlite://'))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def provisioner() -> FixedProvisioner:
    return FixedProvisioner()


@pytest.fixture
def client(store, provisioner, notifier):
    app = create_app(store=store, provisioner=provisioner, notifier=notifier)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def booking_payload() -> dict:
    return {
        'patientName': 'Jordan Lee',
        'patientEmail': 'jordan@example.com',
        'date': '2025-03-10T09:00:00',
        'type': 'Initial Consultation',
    }
