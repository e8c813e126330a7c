from unittest import mock

import pytest
import requests
from django.core import mail

from notifications import mailer, sms
from notifications.dispatch import notify_order_owner

ENTRY = {'status': 'In Transit', 'location': 'Leeds <hub>', 'message': 'On its way'}


def test_tracking_email_in_test_mode(settings):
    settings.APP_BASE_URL = 'https://shop.example.com'

    result = mailer.send_tracking_update_email('jane@example.com', '42', ENTRY)

    assert result == {'sent': True, 'mocked': True}
    message = mail.outbox[-1]
    assert message.subject == 'Order 42 — Tracking update: In Transit'
    html = message.alternatives[0][0]
    assert 'Leeds &lt;hub&gt;' in html
    assert 'https://shop.example.com/orders/42' in message.body


def test_email_skipped_when_smtp_has_no_host(settings):
    settings.NOTIFICATIONS_TEST_MODE = False
    settings.EMAIL_BACKEND = 'django.core.mail.backends.smtp.EmailBackend'
    settings.EMAIL_HOST = ''

    assert mailer.send_admin_message_email('jane@example.com', 'Hi', 'Hello') == {'sent': False, 'skipped': True}


def test_email_sent_through_configured_backend(settings):
    settings.NOTIFICATIONS_TEST_MODE = False
    settings.EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

    result = mailer.send_admin_message_email('jane@example.com', 'Hi', 'Hello')

    assert result == {'sent': True, 'info': 1}
    assert mail.outbox[-1].to == ['jane@example.com']


def test_email_failure_is_reported_not_raised(settings):
    settings.NOTIFICATIONS_TEST_MODE = False
    settings.EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

    with mock.patch('notifications.mailer.EmailMultiAlternatives.send', side_effect=OSError('smtp down')):
        result = mailer.send_admin_message_email('jane@example.com', 'Hi', 'Hello')

    assert result == {'sent': False, 'error': 'smtp down'}


def test_sms_body():
    assert sms.tracking_sms_body('42', ENTRY) == 'Order 42 update: In Transit. On its way Location: Leeds <hub>'
    assert sms.tracking_sms_body('42', {'status': 'Delivered'}) == 'Order 42 update: Delivered.'


def test_sms_test_mode_captures():
    assert sms.send_tracking_sms('+447700900123', '42', ENTRY) == {'sent': True, 'mocked': True}
    assert sms.outbox[-1]['to'] == '+447700900123'


def test_sms_skipped_without_twilio_credentials(settings):
    settings.NOTIFICATIONS_TEST_MODE = False
    settings.SMS_BACKEND = 'notifications.sms.TwilioBackend'
    settings.TWILIO_ACCOUNT_SID = ''

    assert sms.send_sms('+447700900123', 'hi') == {'sent': False, 'skipped': True}


def test_sms_via_twilio(settings):
    settings.NOTIFICATIONS_TEST_MODE = False
    settings.SMS_BACKEND = 'notifications.sms.TwilioBackend'
    settings.TWILIO_ACCOUNT_SID = 'AC123'
    settings.TWILIO_AUTH_TOKEN = 'secret'
    settings.TWILIO_FROM_NUMBER = '+15005550006'

    with mock.patch('notifications.sms.requests.post') as post:
        post.return_value.json.return_value = {'sid': 'SM1'}
        result = sms.send_sms('+447700900123', 'hi')

    assert result == {'sent': True, 'info': {'sid': 'SM1'}}
    url = post.call_args.args[0]
    assert url == 'https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json'
    assert post.call_args.kwargs['data']['To'] == '+447700900123'


def test_sms_failure_is_reported_not_raised(settings):
    settings.NOTIFICATIONS_TEST_MODE = False
    settings.SMS_BACKEND = 'notifications.sms.TwilioBackend'
    settings.TWILIO_ACCOUNT_SID = 'AC123'
    settings.TWILIO_AUTH_TOKEN = 'secret'
    settings.TWILIO_FROM_NUMBER = '+15005550006'

    with mock.patch('notifications.sms.requests.post', side_effect=requests.ConnectionError('down')):
        result = sms.send_sms('+447700900123', 'hi')

    assert result['sent'] is False
    assert 'down' in result['error']


@pytest.mark.django_db
def test_notify_order_owner_uses_both_channels(order, customer):
    results = notify_order_owner(order, ENTRY)

    assert results == {'email': {'sent': True, 'mocked': True}, 'sms': {'sent': True, 'mocked': True}}


@pytest.mark.django_db
def test_notify_email_failure_does_not_block_sms(order):
    with mock.patch('notifications.dispatch.send_tracking_update_email', side_effect=RuntimeError('boom')):
        results = notify_order_owner(order, ENTRY)

    assert results['email'] == {'sent': False, 'error': 'boom'}
    assert results['sms'] == {'sent': True, 'mocked': True}


@pytest.mark.django_db
def test_notify_without_phone_is_email_only(order, customer):
    customer.phone = ''
    customer.save()
    order.refresh_from_db()

    assert set(notify_order_owner(order, ENTRY)) == {'email'}


@pytest.mark.django_db
def test_notify_orphaned_order(order):
    order.user = None
    assert notify_order_owner(order, ENTRY) == {}
