"""
Outgoing email.

``send_email`` raises DispatchError so callers that care can react. The
registration flows only use the ``send_*`` helpers below, which run after the
registration is stored and never let a mail failure escape.
"""

import structlog
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils.html import strip_tags

from .exceptions import DispatchError

logger = structlog.get_logger(__name__)


def send_email(*, to, subject: str, html: str, text: str = None, bcc=None) -> None:
    """
    Send a multipart (text + HTML) email.

    Args:
        to: Recipient address or list of addresses
        subject: Subject line
        html: HTML body
        text: Plain-text body; derived from ``html`` when omitted
        bcc: Optional list of blind-copy addresses

    Raises:
        DispatchError: If the mail backend rejected the message
    """
    recipients = [to] if isinstance(to, str) else list(to)
    message = EmailMultiAlternatives(
        subject=subject,
        body=text or strip_tags(html),
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=recipients,
        bcc=list(bcc or []),
    )
    message.attach_alternative(html, 'text/html')

    try:
        message.send(fail_silently=False)
    except Exception as exc:
        # SMTP, socket and HTTP-API backends each raise their own errors
        raise DispatchError(f"Failed to send '{subject}' to {', '.join(recipients)}: {exc}") from exc


def send_welcome_email(attendee) -> bool:
    """
    Fire-and-forget welcome email for an approved attendee.

    Returns:
        True if the message was handed to the backend
    """
    context = {
        'attendee': attendee,
        'event_name': settings.EVENT_NAME,
    }
    try:
        send_email(
            to=attendee.email,
            subject=f"Welcome to {settings.EVENT_NAME}",
            html=render_to_string('emails/attendee_welcome.html', context),
            text=render_to_string('emails/attendee_welcome.txt', context),
        )
    except Exception as exc:
        logger.warning(
            "welcome_email_failed",
            attendee_id=str(attendee.id),
            error=str(exc),
        )
        return False

    logger.info("welcome_email_sent", attendee_id=str(attendee.id))
    return True
