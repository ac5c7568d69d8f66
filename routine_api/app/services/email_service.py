"""
E‑mail transport and message templates.

``EmailTransport`` posts messages to a Resend‑compatible HTTP API with
``requests``.  ``send`` reports success as a boolean and never raises:
callers decide whether a failed delivery matters (invitations) or is
merely logged (verification links).
"""

import html
import logging
from typing import Optional

import requests

from ..core.config import Settings

logger = logging.getLogger(__name__)


class EmailTransport:
    """Deliver HTML e‑mail through the configured provider."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()

    @property
    def enabled(self) -> bool:
        return bool(self.settings.mail_api_key)

    def send(self, to: str, subject: str, html_body: str) -> bool:
        """Send a message; return ``True`` when the provider accepted it."""
        if not self.enabled:
            logger.warning("E‑mail transport is not configured; dropping message to %s", to)
            return False
        payload = {
            "from": f"{self.settings.sender_name} <{self.settings.sender_email}>",
            "to": [to],
            "subject": subject,
            "html": html_body,
        }
        try:
            response = self.session.post(
                self.settings.mail_api_url,
                json=payload,
                headers={"Authorization": f"Bearer {self.settings.mail_api_key}"},
                timeout=self.settings.http_timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Failed to send e‑mail to %s: %s", to, exc)
            return False
        logger.info("Sent '%s' e‑mail to %s", subject, to)
        return True


def render_invite_email(
    sender_name: str,
    sender_avatar_url: str,
    message: Optional[str],
    navigate_link: Optional[str],
) -> str:
    """HTML body of an invitation."""
    name = html.escape(sender_name)
    body = html.escape(message) if message else f"{name} invited you to join their routine."
    button = ""
    if navigate_link:
        button = (
            f'<p><a href="{html.escape(navigate_link, quote=True)}" '
            'style="padding:10px 18px;background:#6c5ce7;color:#fff;border-radius:6px;'
            'text-decoration:none">Accept invitation</a></p>'
        )
    return (
        "<div style=\"font-family:sans-serif\">"
        f'<img src="{html.escape(sender_avatar_url, quote=True)}" alt="{name}" width="64" height="64" '
        'style="border-radius:50%"/>'
        f"<h2>{name} invited you!</h2>"
        f"<p>{body}</p>"
        f"{button}"
        "</div>"
    )


def render_verification_email(user_name: str, link: str) -> str:
    """HTML body of the account verification message."""
    return (
        "<div style=\"font-family:sans-serif\">"
        f"<h2>Welcome, {html.escape(user_name)}!</h2>"
        "<p>Please confirm your e‑mail address to finish setting up your account.</p>"
        f'<p><a href="{html.escape(link, quote=True)}">Verify my account</a></p>'
        "</div>"
    )
