"""
Every change to an order's tracking goes through record_event.

It appends to the history, moves tracking_status and the coarser
order_status together, stamps shipped_at once, and the post_save signal on
TrackingEvent tells the customer.
"""
import logging
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from orders.models import (
    CANCELLED,
    DELIVERED,
    EXCEPTION,
    IN_TRANSIT,
    LABEL_CREATED,
    OUT_FOR_DELIVERY,
    PROCESSING,
    SHIPPED,
    Order,
)
from . import carriers
from .easypost import EasyPostClient, EasyPostError
from .models import SOURCE_ADMIN, SOURCE_POLLER, SOURCE_TRACKER, TrackingEvent
from .webhooks import parse_update

logger = logging.getLogger(__name__)

ORDER_STATUS_FOR_TRACKING = {
    LABEL_CREATED: SHIPPED,
    IN_TRANSIT: SHIPPED,
    OUT_FOR_DELIVERY: SHIPPED,
    EXCEPTION: SHIPPED,
    DELIVERED: DELIVERED,
    CANCELLED: CANCELLED,
}

# first of these stamps shipped_at
SHIPPED_STATUSES = {IN_TRANSIT, OUT_FOR_DELIVERY, DELIVERED}

POLL_SEQUENCE = [LABEL_CREATED, IN_TRANSIT, OUT_FOR_DELIVERY, DELIVERED]
POLL_MESSAGE = 'Automated status update (demo)'


def record_event(order, status, location='', message='', source=SOURCE_ADMIN, order_status=None,
                 skip_if_same=False, **fields):
    """
    Append a tracking entry and apply it to the order.

    `fields` are extra order attributes to set in the same write, e.g.
    tracking_number, carrier, tracking_url. `order_status` overrides the
    lookup table (auto-assign keeps an order at Processing on label creation).
    With `skip_if_same`, an entry equal to the latest one (status, location,
    message) is dropped under the row lock and event comes back as None.
    Returns (order, event); the order returned is the freshly saved row.
    """
    if status not in ORDER_STATUS_FOR_TRACKING:
        raise ValueError(f"Unknown tracking status: {status}")
    location = location or ''
    message = message or ''

    with transaction.atomic():
        locked = Order.objects.select_for_update().get(pk=order.pk)

        if skip_if_same:
            last = locked.tracking_history.order_by('-timestamp', '-id').first()
            if last and (last.status, last.location, last.message) == (status, location, message):
                logger.info(f"Order {locked.pk}: duplicate {status} entry from {source} ignored")
                return locked, None

        now = timezone.now()
        for field, value in fields.items():
            setattr(locked, field, value)
        locked.tracking_status = status
        locked.order_status = order_status or ORDER_STATUS_FOR_TRACKING[status]
        if status in SHIPPED_STATUSES and locked.shipped_at is None:
            locked.shipped_at = now
        locked.save()

        event = TrackingEvent.objects.create(
            order=locked,
            status=status,
            location=location,
            message=message,
            source=source,
            timestamp=now,
        )

    logger.info(f"Order {locked.pk} tracking -> {status} ({source})")
    return locked, event


def assign_tracking(order, carrier=None):
    """Generate a label for `order` (random supported carrier when none given)."""
    tracking = carriers.generate_tracking(carrier)
    order, event = record_event(
        order,
        LABEL_CREATED,
        location='Processing facility',
        message=f"Tracking label generated for {tracking['carrier']}",
        source=SOURCE_ADMIN,
        order_status=PROCESSING,
        **tracking,
    )
    return order, event


def next_poll_status(order, now=None, interval=None):
    """
    Where the poller would move `order` next, or None to leave it alone.

    No history means In Transit straight away. Otherwise the order steps
    along POLL_SEQUENCE once the last entry is older than the interval;
    anything off the sequence (Exception) is left for a human.
    """
    now = now or timezone.now()
    if interval is None:
        interval = timedelta(minutes=settings.TRACKING_POLL_INTERVAL_MINUTES)

    last = order.tracking_history.order_by('-timestamp', '-id').first()
    if last is None:
        return IN_TRANSIT
    if last.status not in POLL_SEQUENCE[:-1]:
        return None
    if now - last.timestamp <= interval:
        return None
    return POLL_SEQUENCE[POLL_SEQUENCE.index(last.status) + 1]


def poll_once(now=None, interval=None):
    """One poller tick. Returns the ids of orders that moved."""
    pending = (
        Order.objects
        .exclude(tracking_number='')
        .exclude(tracking_status__in=[DELIVERED, CANCELLED])
        .order_by('id')
    )

    advanced = []
    for order in pending:
        # one bad order must not stop the tick
        try:
            status = next_poll_status(order, now=now, interval=interval)
            if status is None:
                continue
            record_event(order, status, message=POLL_MESSAGE, source=SOURCE_POLLER)
            advanced.append(order.pk)
        except Exception:
            logger.exception(f"Poller failed on order {order.pk}")

    if advanced:
        logger.info(f"Poller advanced {len(advanced)} order(s)")
    return advanced


def refresh_from_provider(order, client=None):
    """
    Pull the provider's current tracker status into the history.

    Only when EasyPost is configured and the order is still moving; the
    client caches trackers for a minute, so repeated lookups stay cheap.
    Provider failures are logged and the order is left as it was.
    Returns True when a new entry was written.
    """
    client = client or EasyPostClient()
    if not client.is_configured() or not order.tracking_number:
        return False
    if order.tracking_status in (DELIVERED, CANCELLED):
        return False

    try:
        tracker = client.get_tracker(order.tracking_number)
    except EasyPostError as e:
        logger.warning(f"Tracker refresh failed for order {order.pk}: {e}")
        return False
    if not isinstance(tracker, dict) or not tracker.get('status'):
        return False

    _, entry = parse_update(tracker)
    if entry['status'] == order.tracking_status:
        return False

    _, event = record_event(
        order,
        entry['status'],
        entry['location'],
        entry['message'],
        source=SOURCE_TRACKER,
        skip_if_same=True,
    )
    return event is not None
