"""
SMS updates for customers.

Backends mirror django's email backends: SMS_BACKEND names a class with a
send(to, body) method. TwilioBackend talks to the Twilio REST API directly
with requests; LocmemBackend keeps messages in `outbox` for tests.
"""
import logging

import requests
from django.conf import settings
from django.utils import timezone
from django.utils.module_loading import import_string
from requests.exceptions import RequestException

logger = logging.getLogger(__name__)

# filled by LocmemBackend and by test mode
outbox = []


class SmsNotConfigured(Exception):
    pass


class BaseSmsBackend:
    def is_configured(self):
        return True

    def send(self, to, body):
        raise NotImplementedError


class LocmemBackend(BaseSmsBackend):
    def send(self, to, body):
        outbox.append({'to': to, 'body': body, 'timestamp': timezone.now()})
        return {'sid': f"locmem-{len(outbox)}"}


class ConsoleBackend(BaseSmsBackend):
    def send(self, to, body):
        logger.info(f"[SMS to {to}] {body}")
        return {'sid': 'console'}


class TwilioBackend(BaseSmsBackend):
    base_url = 'https://api.twilio.com/2010-04-01'

    def __init__(self):
        self.account_sid = settings.TWILIO_ACCOUNT_SID
        self.auth_token = settings.TWILIO_AUTH_TOKEN
        self.from_number = settings.TWILIO_FROM_NUMBER
        self.timeout = 10

    def is_configured(self):
        return bool(self.account_sid and self.auth_token and self.from_number)

    def send(self, to, body):
        if not self.is_configured():
            raise SmsNotConfigured("Twilio credentials missing")

        url = f"{self.base_url}/Accounts/{self.account_sid}/Messages.json"
        response = requests.post(
            url,
            data={'From': self.from_number, 'To': to, 'Body': body},
            auth=(self.account_sid, self.auth_token),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()


def get_backend():
    return import_string(settings.SMS_BACKEND)()


def reset_outbox():
    outbox.clear()


def send_sms(to, body):
    if settings.NOTIFICATIONS_TEST_MODE:
        LocmemBackend().send(to, body)
        return {'sent': True, 'mocked': True}

    backend = get_backend()
    if not backend.is_configured():
        logger.info(f"SMS not configured; skipping SMS to {to}")
        return {'sent': False, 'skipped': True}

    try:
        info = backend.send(to, body)
        logger.info(f"SMS sent to {to}")
        return {'sent': True, 'info': info}
    except (RequestException, SmsNotConfigured) as e:
        logger.error(f"Failed to send SMS to {to}: {e}")
        return {'sent': False, 'error': str(e)}


def tracking_sms_body(order_id, entry):
    body = f"Order {order_id} update: {entry.get('status', '')}."
    if entry.get('message'):
        body += f" {entry['message']}"
    if entry.get('location'):
        body += f" Location: {entry['location']}"
    return body


def send_tracking_sms(to, order_id, entry):
    return send_sms(to, tracking_sms_body(order_id, entry))
