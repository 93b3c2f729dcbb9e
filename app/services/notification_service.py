"""
Notification Sender - delivers formatted messages to participants.

Sending is SIMULATED: each message is logged and recorded in the
notifications collection with status SIMULATED. A real transport (SMTP,
WhatsApp) can replace deliver() later without touching callers.
"""

from firebase_admin import firestore
from app.config.firebase import get_db
from app.core.settings import settings
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)


class NotificationSender:

    STATUS_SIMULATED = "SIMULATED"

    def __init__(self, db=None):
        self.db = db or get_db()

    def deliver(self, recipient: str, subject: str, body: str, channel: str) -> None:
        logger.info(f"[{channel.upper()}] -> {recipient}: {subject}")

    def send(self, recipient: str, subject: str, body: str,
             channel: str = "email", context: Optional[Dict] = None) -> Dict:
        """
        Deliver one message and record it. Delivery errors propagate to the
        caller, which decides whether to skip or abort.
        """
        if not recipient:
            raise ValueError("recipient is required")

        self.deliver(recipient, subject, body, channel)

        record = {
            "recipient": recipient,
            "subject": subject,
            "body": body,
            "channel": channel,
            "sender": settings.NOTIFICATION_SENDER_NAME,
            "status": self.STATUS_SIMULATED,
            "context": context or {},
            "sent_at": firestore.SERVER_TIMESTAMP,
        }
        doc_ref = self.db.collection(settings.NOTIFICATIONS_COLLECTION).document()
        doc_ref.set(record)
        return {**record, "id": doc_ref.id}


# Global service instance
_notification_sender = None


def get_notification_sender() -> NotificationSender:
    global _notification_sender
    if _notification_sender is None:
        _notification_sender = NotificationSender()
    return _notification_sender
