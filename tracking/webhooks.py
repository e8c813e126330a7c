"""
Carrier webhook helpers: signature checks and turning provider payloads into
tracking entries.
"""
import hashlib
import hmac
import logging

from orders.models import (
    CANCELLED,
    DELIVERED,
    EXCEPTION,
    IN_TRANSIT,
    LABEL_CREATED,
    OUT_FOR_DELIVERY,
    TRACKING_STATUSES,
)

logger = logging.getLogger(__name__)

SIGNATURE_HEADERS = ('X-Hook-Signature', 'X-EasyPost-Signature')

PROVIDER_STATUSES = {
    'pre_transit': LABEL_CREATED,
    'in_transit': IN_TRANSIT,
    'out_for_delivery': OUT_FOR_DELIVERY,
    'available_for_pickup': OUT_FOR_DELIVERY,
    'delivered': DELIVERED,
    'return_to_sender': EXCEPTION,
    'failure': EXCEPTION,
    'error': EXCEPTION,
    'cancelled': CANCELLED,
}


def signature_from_headers(headers):
    for name in SIGNATURE_HEADERS:
        if headers.get(name):
            return headers[name]
    return ''


def verify_signature(raw_body, signature, secret):
    """
    HMAC-SHA256 hex digest of the raw body, optionally prefixed "sha256=".

    No secret configured means every webhook is accepted.
    """
    if not secret:
        logger.warning("EASYPOST_WEBHOOK_SECRET not set; accepting unsigned webhook")
        return True
    if not signature:
        return False

    incoming = signature.strip()
    if incoming.startswith('sha256='):
        incoming = incoming[len('sha256='):]

    if isinstance(raw_body, str):
        raw_body = raw_body.encode()
    computed = hmac.new(secret.encode(), raw_body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(incoming.lower(), computed)


def normalize_status(raw):
    """Provider status -> tracking status; unknown values count as In Transit."""
    if not raw:
        return IN_TRANSIT
    if raw in TRACKING_STATUSES:
        return raw
    key = str(raw).strip().lower().replace(' ', '_').replace('-', '_')
    return PROVIDER_STATUSES.get(key, IN_TRANSIT)


def _format_location(location):
    if isinstance(location, str):
        return location
    if not isinstance(location, dict):
        return ''
    parts = [location.get(key) for key in ('city', 'state', 'country')]
    return ', '.join(str(part) for part in parts if part)


def _text(value):
    if value is None or isinstance(value, (dict, list)):
        return ''
    return str(value)


def parse_update(payload):
    """
    Pull (tracking_code, entry) out of a webhook event.

    EasyPost wraps the tracker in "result"; bare trackers are accepted too.
    tracking_code is None when the payload names no usable code. Parts of
    the payload with the wrong shape are ignored rather than rejected.
    """
    result = payload.get('result', payload) if isinstance(payload, dict) else None
    if not isinstance(result, dict):
        return None, None

    codes = result.get('tracking_codes')
    first_code = codes[0] if isinstance(codes, list) and codes else None
    tracking_code = _text(result.get('tracking_code') or first_code or result.get('tracking_number')) or None

    raw_status = _text(result.get('status') or result.get('tracking_status'))
    details = result.get('tracking_details')
    details = [d for d in details if isinstance(d, dict)] if isinstance(details, list) else []
    latest = details[-1] if details else {}

    location = _text(latest.get('checkpoint_location')) or _format_location(latest.get('tracking_location'))
    message = _text(result.get('message')) or _text(latest.get('message')) or f"Carrier update: {raw_status or 'unknown'}"

    return tracking_code, {
        'status': normalize_status(raw_status),
        'location': location,
        'message': message,
    }
