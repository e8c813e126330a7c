import logging
import threading

from django.conf import settings

from .mailer import send_tracking_update_email
from .sms import send_tracking_sms

logger = logging.getLogger(__name__)


def _send_tracking_updates(email, phone, order_id, entry):
    results = {}
    # channels are independent - one failing never stops the other
    if email:
        try:
            results['email'] = send_tracking_update_email(email, order_id, entry)
        except Exception as e:
            logger.error(f"Email notification failed for order {order_id}: {e}")
            results['email'] = {'sent': False, 'error': str(e)}
    if phone:
        try:
            results['sms'] = send_tracking_sms(phone, order_id, entry)
        except Exception as e:
            logger.error(f"SMS notification failed for order {order_id}: {e}")
            results['sms'] = {'sent': False, 'error': str(e)}
    return results


def notify_order_owner(order, entry):
    """
    Tell the order's owner about a tracking entry by email and/or sms.

    Best effort: nothing is retried and nothing is raised. Runs in a daemon
    thread unless NOTIFICATIONS_ASYNC is off (tests), in which case the
    per-channel results are returned.
    """
    user = order.user
    if user is None:
        return {}

    # plain values only, the thread must not touch the db
    email = user.email
    phone = user.phone
    order_id = str(order.pk)
    entry = dict(entry)

    if settings.NOTIFICATIONS_ASYNC and not settings.NOTIFICATIONS_TEST_MODE:
        thread = threading.Thread(
            target=_send_tracking_updates,
            args=(email, phone, order_id, entry),
        )
        thread.daemon = True
        thread.start()
        return {}

    return _send_tracking_updates(email, phone, order_id, entry)
