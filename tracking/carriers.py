"""
Carrier registry: tracking number formats and public tracking pages.

Generated numbers are demo labels, they pass the carrier's format check but
are not registered with the carrier.
"""
import random
import re
import string
from collections import namedtuple

Carrier = namedtuple('Carrier', ['name', 'pattern', 'url_template', 'generate'])

FEDEX = 'FedEx'
UPS = 'UPS'
DHL = 'DHL'
ROYAL_MAIL = 'Royal Mail'
PARCELFORCE = 'Parcelforce'
EASYPOST = 'EasyPost'

DEFAULT_URL_TEMPLATE = 'https://www.tracking-service.com/?track={number}'

_rng = random.SystemRandom()


def _digits(n):
    return ''.join(_rng.choice(string.digits) for _ in range(n))


def _chars(alphabet, n):
    return ''.join(_rng.choice(alphabet) for _ in range(n))


CARRIERS = {
    FEDEX: Carrier(
        FEDEX,
        re.compile(r'^\d{12}$'),
        'https://tracking.fedex.com/en/tracking/{number}',
        lambda: _digits(12),
    ),
    UPS: Carrier(
        UPS,
        re.compile(r'^1Z[A-Z0-9]{16}$'),
        'https://www.ups.com/track?tracknum={number}',
        lambda: '1Z' + _chars(string.ascii_uppercase + string.digits, 16),
    ),
    DHL: Carrier(
        DHL,
        re.compile(r'^\d{10,11}$'),
        'https://www.dhl.com/en/en/home/tracking.html?tracking-id={number}',
        lambda: _digits(_rng.choice([10, 11])),
    ),
    ROYAL_MAIL: Carrier(
        ROYAL_MAIL,
        re.compile(r'^[A-Z]{2}\d{9}GB$'),
        'https://tracking.royalmail.post/en/tracking?number={number}',
        lambda: _chars(string.ascii_uppercase, 2) + _digits(9) + 'GB',
    ),
    PARCELFORCE: Carrier(
        PARCELFORCE,
        re.compile(r'^RN\d{9}GB$'),
        'https://www.parcelforce.com/tracking?number={number}',
        lambda: 'RN' + _digits(9) + 'GB',
    ),
    EASYPOST: Carrier(
        EASYPOST,
        re.compile(r'^ep_[0-9a-f]{8}_[0-9a-f]{8}$'),
        'https://track.easypost.com/{number}',
        lambda: f"ep_{_chars('0123456789abcdef', 8)}_{_chars('0123456789abcdef', 8)}",
    ),
}

# offered in the admin dropdown and picked from at random
SUPPORTED_CARRIERS = [FEDEX, UPS, DHL, ROYAL_MAIL, PARCELFORCE]


class UnknownCarrier(ValueError):
    pass


def get_carrier(name):
    try:
        return CARRIERS[name]
    except KeyError:
        raise UnknownCarrier(f"Unsupported carrier: {name}") from None


def generate_tracking_number(carrier):
    return get_carrier(carrier).generate()


def tracking_url(number, carrier):
    """Public tracking page for a number. Unknown carriers get a generic lookup page."""
    template = CARRIERS[carrier].url_template if carrier in CARRIERS else DEFAULT_URL_TEMPLATE
    return template.format(number=number)


def generate_tracking(carrier=None):
    """Pick a carrier (random supported one when none given), return number, carrier and url."""
    if carrier is None:
        carrier = _rng.choice(SUPPORTED_CARRIERS)
    number = generate_tracking_number(carrier)
    return {
        'tracking_number': number,
        'carrier': carrier,
        'tracking_url': tracking_url(number, carrier),
    }


def validate_tracking_number(number, carrier):
    return bool(get_carrier(carrier).pattern.match(number or ''))


def detect_carrier(number):
    """
    Best guess at the carrier from the number alone, or None.

    FedEx (12 digits) is checked before DHL (10-11 digits), and Parcelforce
    before Royal Mail since every Parcelforce number also looks like Royal Mail.
    """
    for name in (EASYPOST, UPS, PARCELFORCE, ROYAL_MAIL, FEDEX, DHL):
        if CARRIERS[name].pattern.match(number or ''):
            return name
    return None
