"""
Service wiring.

``build_services`` creates one instance of every service for an
application, handing each its collaborators explicitly.  The bundle
is stored on ``app.state`` and handlers reach it through the
``get_services`` dependency.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from ..services.activity_service import ActivityService
from ..services.asset_service import CloudinaryStorage
from ..services.email_service import EmailTransport
from ..services.event_service import EventService
from ..services.invite_service import InviteService
from ..services.tag_service import TagService
from ..services.task_service import TaskService
from ..services.user_service import UserService
from .config import Settings
from .db import DocumentStore


@dataclass
class Services:
    activities: ActivityService
    users: UserService
    tags: TagService
    tasks: TaskService
    events: EventService
    invites: InviteService


def build_services(
    settings: Settings,
    store: DocumentStore,
    mailer: Optional[EmailTransport] = None,
    assets: Optional[CloudinaryStorage] = None,
) -> Services:
    """Create the service graph; missing collaborators get their defaults."""
    mailer = mailer or EmailTransport(settings)
    assets = assets or CloudinaryStorage(settings)
    activities = ActivityService(store)
    users = UserService(store, settings, activities, mailer, assets)
    tags = TagService(store, settings)
    return Services(
        activities=activities,
        users=users,
        tags=tags,
        tasks=TaskService(store, settings, users, tags),
        events=EventService(store, users, activities),
        invites=InviteService(store, mailer),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services
