from datetime import timedelta
from unittest import mock

import pytest
from django.core import mail
from django.core.management import call_command
from django.db import transaction
from django.utils import timezone

from notifications import sms
from orders.models import Order
from tracking.easypost import EasyPostError
from tracking.models import TrackingEvent
from tracking.services import (
    assign_tracking,
    next_poll_status,
    poll_once,
    record_event,
    refresh_from_provider,
)

pytestmark = pytest.mark.django_db

INTERVAL = timedelta(minutes=5)


def later(minutes=10):
    return timezone.now() + timedelta(minutes=minutes)


@pytest.mark.parametrize('tracking_status, order_status', [
    ('Label Created', 'Shipped'),
    ('In Transit', 'Shipped'),
    ('Out for Delivery', 'Shipped'),
    ('Exception', 'Shipped'),
    ('Delivered', 'Delivered'),
    ('Cancelled', 'Cancelled'),
])
def test_record_event_drives_order_status(order, tracking_status, order_status):
    order, event = record_event(order, tracking_status, 'Hub', 'update')

    assert order.tracking_status == tracking_status
    assert order.order_status == order_status
    assert event.source == 'admin'
    assert list(order.tracking_history.values_list('status', flat=True)) == [tracking_status]


def test_record_event_rejects_unknown_status(order):
    with pytest.raises(ValueError):
        record_event(order, 'Lost at sea')
    assert not TrackingEvent.objects.exists()


def test_shipped_at_stamped_once(order):
    order, _ = record_event(order, 'Label Created')
    assert order.shipped_at is None

    order, _ = record_event(order, 'In Transit')
    first = order.shipped_at
    assert first is not None

    order, _ = record_event(order, 'Delivered')
    assert order.shipped_at == first


def test_history_is_append_only(order):
    _, event = record_event(order, 'In Transit')
    event.message = 'rewritten'
    with pytest.raises(ValueError):
        event.save()


def test_record_event_notifies_owner(order, customer, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        record_event(order, 'Out for Delivery', 'Local depot', 'Driver assigned')

    assert mail.outbox[-1].to == [customer.email]
    assert mail.outbox[-1].subject == f"Order {order.pk} — Tracking update: Out for Delivery"
    assert sms.outbox[-1]['body'] == f"Order {order.pk} update: Out for Delivery. Driver assigned Location: Local depot"


def test_notification_waits_for_commit(order, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks() as callbacks:
        record_event(order, 'In Transit', 'Hub', 'Departed')
        assert mail.outbox == []
        assert sms.outbox == []

    assert len(callbacks) == 1
    callbacks[0]()
    assert len(mail.outbox) == 1
    assert len(sms.outbox) == 1


def test_rolled_back_entry_is_never_announced(order, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(RuntimeError):
            with transaction.atomic():
                record_event(order, 'In Transit', 'Hub', 'Departed')
                raise RuntimeError('boom')

    assert callbacks == []
    assert not order.tracking_history.exists()
    assert mail.outbox == []
    assert sms.outbox == []


def test_skip_if_same_drops_a_repeated_entry(order):
    record_event(order, 'In Transit', 'Hub', 'Departed')

    order, event = record_event(order, 'In Transit', 'Hub', 'Departed', skip_if_same=True)
    assert event is None
    assert order.tracking_history.count() == 1

    _, event = record_event(order, 'In Transit', 'Hub', 'Arrived', skip_if_same=True)
    assert event is not None
    assert order.tracking_history.count() == 2


class FakeProvider:
    def __init__(self, tracker=None, error=None):
        self.tracker = tracker
        self.error = error
        self.calls = []

    def is_configured(self):
        return True

    def get_tracker(self, code):
        self.calls.append(code)
        if self.error:
            raise self.error
        return self.tracker


def test_refresh_from_provider_records_new_status(order):
    order, _ = assign_tracking(order, 'FedEx')
    provider = FakeProvider({
        'status': 'out_for_delivery',
        'tracking_details': [{'message': 'With courier', 'tracking_location': {'city': 'Leeds', 'country': 'GB'}}],
    })

    assert refresh_from_provider(order, client=provider) is True

    assert provider.calls == [order.tracking_number]
    order.refresh_from_db()
    assert order.tracking_status == 'Out for Delivery'
    latest = order.tracking_history.last()
    assert (latest.source, latest.location, latest.message) == ('tracker', 'Leeds, GB', 'With courier')


def test_refresh_from_provider_same_status_writes_nothing(order):
    order, _ = assign_tracking(order, 'FedEx')

    assert refresh_from_provider(order, client=FakeProvider({'status': 'pre_transit'})) is False
    assert order.tracking_history.count() == 1


def test_refresh_from_provider_leaves_finished_orders(order):
    order, _ = assign_tracking(order, 'FedEx')
    order, _ = record_event(order, 'Delivered')
    provider = FakeProvider({'status': 'return_to_sender'})

    assert refresh_from_provider(order, client=provider) is False
    assert provider.calls == []


def test_refresh_from_provider_failure_is_ignored(order):
    order, _ = assign_tracking(order, 'FedEx')

    assert refresh_from_provider(order, client=FakeProvider(error=EasyPostError('down'))) is False
    order.refresh_from_db()
    assert order.tracking_status == 'Label Created'


def test_refresh_needs_a_configured_provider(order):
    order, _ = assign_tracking(order, 'FedEx')
    with mock.patch('tracking.easypost.requests.request') as request:
        assert refresh_from_provider(order) is False
    request.assert_not_called()


def test_assign_tracking(order):
    order, event = assign_tracking(order, 'UPS')

    assert order.carrier == 'UPS'
    assert order.tracking_number.startswith('1Z')
    assert order.tracking_url == f"https://www.ups.com/track?tracknum={order.tracking_number}"
    assert order.tracking_status == 'Label Created'
    assert order.order_status == 'Processing'
    assert event.message == 'Tracking label generated for UPS'
    assert event.location == 'Processing facility'


def test_next_poll_status_without_history(order):
    assert next_poll_status(order, interval=INTERVAL) == 'In Transit'


def test_next_poll_status_waits_for_interval(order):
    record_event(order, 'Label Created')
    assert next_poll_status(order, now=timezone.now(), interval=INTERVAL) is None
    assert next_poll_status(order, now=later(), interval=INTERVAL) == 'In Transit'


def test_next_poll_status_leaves_exceptions_alone(order):
    record_event(order, 'Exception')
    assert next_poll_status(order, now=later(), interval=INTERVAL) is None


def test_poll_walks_the_sequence(order):
    assign_tracking(order, 'FedEx')

    seen = []
    for step in range(1, 5):
        poll_once(now=later(10 * step), interval=INTERVAL)
        order.refresh_from_db()
        seen.append(order.tracking_status)

    assert seen == ['In Transit', 'Out for Delivery', 'Delivered', 'Delivered']
    assert order.order_status == 'Delivered'
    poller_entries = order.tracking_history.filter(source='poller')
    assert poller_entries.count() == 3
    assert set(poller_entries.values_list('message', flat=True)) == {'Automated status update (demo)'}


def test_poll_skips_orders_without_tracking_number(order):
    assert poll_once(now=later(), interval=INTERVAL) == []
    assert not order.tracking_history.exists()


def test_one_bad_order_does_not_stop_the_tick(order, customer, product):
    from orders.services import place_order
    second = place_order(customer, [{'product_id': product.pk, 'quantity': 1}], order.shipping_address, 'Paystack')
    Order.objects.filter(pk__in=[order.pk, second.pk]).update(tracking_number='123456789012', carrier='FedEx')

    with mock.patch('tracking.services.next_poll_status', side_effect=[RuntimeError('boom'), 'In Transit']):
        advanced = poll_once(now=later(), interval=INTERVAL)

    assert advanced == [second.pk]


def test_poll_tracking_command_once(order):
    assign_tracking(order, 'DHL')
    TrackingEvent.objects.filter(order=order).update(timestamp=timezone.now() - timedelta(hours=1))

    call_command('poll_tracking', '--once', '--interval', '5')

    order.refresh_from_db()
    assert order.tracking_status == 'In Transit'
