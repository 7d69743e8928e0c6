"""Video meeting provisioning for booked appointments."""

import logging
import random
import secrets
import string
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

logger = logging.getLogger(__name__)

PASSWORD_ALPHABET = string.ascii_lowercase + string.digits
PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class MeetingDetails:
    meeting_id: str
    join_url: str
    password: str


class MeetingProvisioner(ABC):
    """Issues a join link and password for an appointment's video session."""

    @abstractmethod
    def create_meeting(self, topic: str, start_time: datetime, duration: int) -> MeetingDetails:
        """Create a meeting, raising on any provider failure."""


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    return ''.join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


class SimulatedZoomProvisioner(MeetingProvisioner):
    """Stands in for the Zoom API with random meeting numbers."""

    base_url = 'https://zoom.us/j/'

    def create_meeting(self, topic: str, start_time: datetime, duration: int) -> MeetingDetails:
        meeting_number = random.randint(0, 999_999)
        logger.info('Simulated Zoom meeting %s for %r at %s (%s min)', meeting_number, topic, start_time.isoformat(), duration)
        return MeetingDetails(
            meeting_id=f'zoom-{meeting_number}',
            join_url=f'{self.base_url}{meeting_number}',
            password=generate_password(),
        )


def fallback_meeting() -> MeetingDetails:
    return MeetingDetails(
        meeting_id=f'fallback-meeting-{int(time.time() * 1000)}',
        join_url=f'{SimulatedZoomProvisioner.base_url}mindconnect{random.randint(0, 999_999)}',
        password=generate_password(),
    )


def provision_meeting(
    provisioner: MeetingProvisioner,
    topic: str,
    start_time: datetime,
    duration: int,
) -> MeetingDetails:
    """Create a meeting, substituting a placeholder if the provider fails.

    Bookings never fail because of the meeting provider.
    """
    try:
        return provisioner.create_meeting(topic, start_time, duration)
    except Exception:
        logger.exception('Meeting creation failed for %r; using fallback meeting.', topic)
        return fallback_meeting()
