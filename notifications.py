"""Best-effort reservation emails.

Two messages go out per reservation: a confirmation to the guest, then a
notice to the restaurant inbox. Each is attempted on its own; failures are
logged and never reach the caller.
"""

import smtplib
from dataclasses import dataclass, field
from email.message import EmailMessage
from typing import List, Optional, Protocol

from loguru import logger

from config import Settings
from exceptions import NotificationError
from models import Reservation
from templating import render


class EmailTransport(Protocol):
    def send(self, to: str, subject: str, html: str) -> None:
        ...


class SmtpEmailTransport:
    """Sends HTML mail over implicit-TLS SMTP, logging in with the sender account."""

    def __init__(self, host: str, port: int, user: str, password: str):
        self.host = host
        self.port = port
        self.user = user
        self.password = password

    def send(self, to: str, subject: str, html: str) -> None:
        msg = EmailMessage()
        msg["From"] = self.user
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content("Please view this message in an HTML capable mail client.")
        msg.add_alternative(html, subtype="html")

        try:
            with smtplib.SMTP_SSL(self.host, self.port) as server:
                server.login(self.user, self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"Failed to send '{subject}' to {to}: {e}") from e


@dataclass
class NotificationResult:
    sent: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


class ReservationNotifier:
    def __init__(
        self,
        transport: Optional[EmailTransport],
        operator_email: Optional[str],
        restaurant_name: str = "Rakugaki",
    ):
        self.transport = transport
        self.operator_email = operator_email
        self.restaurant_name = restaurant_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReservationNotifier":
        if not settings.email_enabled:
            logger.info("Email credentials not configured, reservation emails disabled")
            return cls(None, None, settings.RESTAURANT_NAME)
        transport = SmtpEmailTransport(
            settings.SMTP_HOST,
            settings.SMTP_PORT,
            settings.EMAIL_USER,
            settings.EMAIL_PASS.get_secret_value(),
        )
        return cls(transport, settings.EMAIL_USER, settings.RESTAURANT_NAME)

    @property
    def enabled(self) -> bool:
        return self.transport is not None and bool(self.operator_email)

    def guest_confirmation(self, reservation: Reservation):
        subject = f"Reservation Confirmation - {self.restaurant_name}"
        html = render(
            "email_confirmation.html",
            restaurant=self.restaurant_name,
            reservation=reservation,
        )
        return reservation.email, subject, html

    def operator_notice(self, reservation: Reservation):
        subject = f"New Reservation - {self.restaurant_name}"
        html = render(
            "email_operator.html",
            restaurant=self.restaurant_name,
            reservation=reservation,
            received=reservation.created_at,
        )
        return self.operator_email, subject, html

    def notify(self, reservation: Reservation) -> NotificationResult:
        """Send the guest confirmation, then the operator notice."""
        result = NotificationResult()
        if not self.enabled:
            return result

        for to, build in (
            (reservation.email, self.guest_confirmation),
            (self.operator_email, self.operator_notice),
        ):
            try:
                _, subject, html = build(reservation)
                self.transport.send(to, subject, html)
            except NotificationError as e:
                logger.error(f"Email error for reservation #{reservation.id}: {e.message}")
                result.failed.append(to)
            except Exception:
                logger.exception(f"Unexpected email error for reservation #{reservation.id}")
                result.failed.append(to)
            else:
                logger.info(f"Sent '{subject}' to {to}")
                result.sent.append(to)
        return result
