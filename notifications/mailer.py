"""
Customer emails for tracking updates and admin messages.

Sends go through django's mail framework. With NOTIFICATIONS_TEST_MODE on,
messages are routed to the locmem backend so tests can read mail.outbox.
"""
import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.utils import timezone
from django.utils.html import escape, strip_tags

logger = logging.getLogger(__name__)

SMTP_BACKEND = 'django.core.mail.backends.smtp.EmailBackend'
LOCMEM_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'


def is_configured():
    # smtp without a host can't go anywhere, every other backend can
    return settings.EMAIL_BACKEND != SMTP_BACKEND or bool(settings.EMAIL_HOST)


def _format_time(timestamp):
    if not timestamp:
        timestamp = timezone.now()
    if isinstance(timestamp, str):
        return timestamp
    return timezone.localtime(timestamp).strftime("%d %b %Y, %H:%M")


def _deliver(to, subject, html, label):
    text = strip_tags(html)

    if settings.NOTIFICATIONS_TEST_MODE:
        msg = EmailMultiAlternatives(subject, text, settings.DEFAULT_FROM_EMAIL, [to],
                                     connection=get_connection(LOCMEM_BACKEND))
        msg.attach_alternative(html, "text/html")
        msg.send()
        return {'sent': True, 'mocked': True}

    if not is_configured():
        logger.info(f"Mailer not configured; skipping email to {to}")
        return {'sent': False, 'skipped': True}

    try:
        msg = EmailMultiAlternatives(subject, text, settings.DEFAULT_FROM_EMAIL, [to])
        msg.attach_alternative(html, "text/html")
        count = msg.send()
        logger.info(f"{label} email sent to {to}")
        return {'sent': bool(count), 'info': count}
    except Exception as e:
        logger.error(f"Failed to send {label.lower()} email to {to}: {e}")
        return {'sent': False, 'error': str(e)}


def send_tracking_update_email(to, order_id, entry):
    """
    Email the customer about a new tracking history entry.

    `entry` is a mapping with status and optional location, message and
    timestamp - the same shape as a tracking history row.
    """
    status = entry.get('status', '')
    location = entry.get('location')
    note = entry.get('message')
    order_url = f"{settings.APP_BASE_URL}/orders/{order_id}"

    subject = f"Order {order_id} — Tracking update: {status}"
    lines = [f"<li><strong>Status:</strong> {escape(status)}</li>"]
    if location:
        lines.append(f"<li><strong>Location:</strong> {escape(location)}</li>")
    if note:
        lines.append(f"<li><strong>Note:</strong> {escape(note)}</li>")
    lines.append(f"<li><strong>Time:</strong> {_format_time(entry.get('timestamp'))}</li>")

    html = (
        "<p>Hi,</p>\n"
        f"<p>Your order <strong>{order_id}</strong> has a new tracking update:</p>\n"
        "<ul>\n" + "\n".join(lines) + "\n</ul>\n"
        f"<p>You can view details in your order page: {order_url}</p>\n"
        "<p>Thanks,<br/>Vitabiotics Team</p>"
    )
    return _deliver(to, subject, html, "Tracking")


def send_admin_message_email(to, subject, message):
    html = (
        "<p>Hi,</p>\n"
        f"<div>{escape(message)}</div>\n"
        "<p>Regards,<br/>Vitabiotics Team</p>"
    )
    return _deliver(to, subject, html, "Admin")
