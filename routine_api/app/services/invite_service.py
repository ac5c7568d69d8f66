"""
Business logic for e‑mail invitations.

An invitation is persisted only after the e‑mail has been handed to
the transport; if delivery fails nothing is stored and the caller gets
a generic error.  Recipients answer an invitation by accepting or
rejecting it.
"""

import logging
from typing import Any, Dict, List

from ..core.db import DocumentStore
from ..core.errors import InternalError, NotFoundError, ValidationError, service_errors
from ..schemas.invite import InviteCreate, InviteRead, InviteStatus
from ..schemas.user import DEFAULT_AVATAR_URL
from ..utils.validators import is_valid_email, normalize_email
from .email_service import EmailTransport, render_invite_email

logger = logging.getLogger(__name__)

INVITE_SUBJECT = "You are invited!"


class InviteService:
    """Send, list and answer invitations."""

    def __init__(self, store: DocumentStore, mailer: EmailTransport) -> None:
        self.store = store
        self.mailer = mailer

    @service_errors
    async def send_invite(self, sender: Dict[str, Any], data: InviteCreate) -> InviteRead:
        recipient = normalize_email(data.recipient_email or "")
        if not is_valid_email(recipient):
            raise ValidationError("Invalid recipient email")
        if recipient == sender["email"]:
            raise ValidationError("You cannot invite yourself")

        avatar = (sender.get("avatar") or {}).get("64") or {}
        body = render_invite_email(
            sender["name"],
            avatar.get("url") or DEFAULT_AVATAR_URL,
            data.message,
            data.navigate_link,
        )
        if not self.mailer.send(recipient, INVITE_SUBJECT, body):
            raise InternalError("Failed to send the invitation. Please try again later.")

        invite = self.store.insert(
            "invites",
            {
                "sender_email": sender["email"],
                "recipient_email": recipient,
                "message": data.message,
                "status": InviteStatus.PENDING.value,
            },
        )
        logger.info("User %s invited %s", sender["id"], recipient)
        return InviteRead(**invite)

    @service_errors
    async def list_invites(self, email: str) -> List[InviteRead]:
        """Invitations the user sent or received, newest first."""
        docs = self.store.find(
            "invites",
            "json_extract(body, '$.sender_email') = ? OR json_extract(body, '$.recipient_email') = ?",
            (email, email),
            order_by="created_at DESC, rowid DESC",
        )
        return [InviteRead(**doc) for doc in docs]

    @service_errors
    async def respond(self, invite_id: str, recipient_email: str, status: InviteStatus) -> InviteRead:
        if status == InviteStatus.PENDING:
            raise ValidationError("An invitation can only be accepted or rejected")
        invite = self.store.get("invites", invite_id)
        if not invite or invite["recipient_email"] != recipient_email:
            raise NotFoundError("Invitation not found")
        invite["status"] = status.value
        return InviteRead(**self.store.replace("invites", invite))
