from fastapi import Request

from mindconnect.integrations.meetings import MeetingProvisioner
from mindconnect.integrations.notifications import Notifier
from mindconnect.storage import MemStorage


def get_store(request: Request) -> MemStorage:
    return request.app.state.store


def get_provisioner(request: Request) -> MeetingProvisioner:
    return request.app.state.provisioner


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier
