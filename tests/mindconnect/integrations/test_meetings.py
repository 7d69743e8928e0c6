from datetime import datetime

from mindconnect.integrations.meetings import (
    MeetingProvisioner,
    SimulatedZoomProvisioner,
    fallback_meeting,
    provision_meeting,
)


class BrokenProvisioner(MeetingProvisioner):
    def create_meeting(self, topic, start_time, duration):
        raise ConnectionError('zoom is down')


def test_simulated_provisioner_returns_zoom_style_meeting() -> None:
    meeting = SimulatedZoomProvisioner().create_meeting('Consultation', datetime(2025, 3, 10, 9, 0), 45)

    number = meeting.meeting_id.removeprefix('zoom-')
    assert number.isdigit()
    assert meeting.join_url == f'https://zoom.us/j/{number}'
    assert len(meeting.password) == 6


def test_fallback_meeting_uses_placeholder_values() -> None:
    meeting = fallback_meeting()

    assert meeting.meeting_id.startswith('fallback-meeting-')
    assert meeting.join_url.startswith('https://zoom.us/j/mindconnect')
    assert len(meeting.password) == 6


def test_provision_meeting_falls_back_when_provider_fails(caplog) -> None:
    meeting = provision_meeting(BrokenProvisioner(), 'Consultation', datetime(2025, 3, 10, 9, 0), 45)

    assert meeting.meeting_id.startswith('fallback-meeting-')
    assert 'using fallback meeting' in caplog.text


def test_provision_meeting_passes_through_successful_meeting() -> None:
    provisioner = SimulatedZoomProvisioner()

    meeting = provision_meeting(provisioner, 'Consultation', datetime(2025, 3, 10, 9, 0), 45)

    assert meeting.meeting_id.startswith('zoom-')
