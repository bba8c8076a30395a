"""Mail transport port and its Django email backend adapter."""

from __future__ import annotations

import smtplib
from typing import Optional, Protocol

from django.conf import settings
from django.core.mail import send_mail

from modules.notifications.exceptions import DeliveryError


class IMailTransport(Protocol):
    """Sends one plain-text message to one recipient.

    Implementations raise ``DeliveryError`` when the message could not be
    handed over; returning normally means the transport accepted it.
    """

    def send(self, recipient: str, subject: str, body: str) -> None: ...


class DjangoMailTransport:
    """``IMailTransport`` backed by the configured Django email backend.

    The sender defaults to ``settings.DEFAULT_FROM_EMAIL``, read at send
    time so test overrides apply.
    """

    def __init__(self, from_email: Optional[str] = None) -> None:
        self._from_email = from_email

    def send(self, recipient: str, subject: str, body: str) -> None:
        try:
            sent = send_mail(
                subject,
                body,
                self._from_email or settings.DEFAULT_FROM_EMAIL,
                [recipient],
                fail_silently=False,
            )
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(recipient, str(exc)) from exc
        except Exception as exc:
            # Third-party backends raise their own error types.
            raise DeliveryError(recipient, f"{type(exc).__name__}: {exc}") from exc
        if not sent:
            raise DeliveryError(recipient, "the mail backend accepted no message")
