import logging
from typing import Any, Dict, Optional

import requests
from django.conf import settings
from requests.exceptions import RequestException

logger = logging.getLogger(__name__)


class PaystackError(Exception):
    pass


class PaystackNotConfigured(PaystackError):
    pass


class PaystackClient:
    """Client for the Paystack transaction API"""

    def __init__(self, secret_key: Optional[str] = None):
        self.secret_key = secret_key if secret_key is not None else settings.PAYSTACK_SECRET_KEY
        self.base_url = 'https://api.paystack.co'
        self.timeout = 15

    def _make_request(self, endpoint: str) -> Dict[str, Any]:
        if not self.secret_key:
            raise PaystackNotConfigured("Paystack configuration missing")

        url = f"{self.base_url}/{endpoint}"
        try:
            response = requests.get(
                url,
                headers={'Authorization': f"Bearer {self.secret_key}"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except RequestException as e:
            logger.error(f"Paystack API request failed: {str(e)}")
            raise PaystackError(str(e)) from e

    def verify_transaction(self, reference: str) -> Dict[str, Any]:
        """
        Look up a transaction by reference.

        Returns Paystack's `data` block; `verified` is True only when the
        call succeeded and the transaction status is "success".
        """
        body = self._make_request(f"transaction/verify/{reference}")
        data = body.get('data') or {}
        return {
            'verified': bool(body.get('status')) and data.get('status') == 'success',
            'status': data.get('status'),
            'reference': data.get('reference', reference),
            'amount': data.get('amount'),
            'customer_email': (data.get('customer') or {}).get('email'),
        }


def mask_key(key):
    if not key:
        return None
    return f"{key[:8]}...{key[-4:]}"
