import logging
from typing import Any, Dict, Optional

import requests
from django.conf import settings
from django.core.cache import cache
from requests.exceptions import RequestException

logger = logging.getLogger(__name__)


class EasyPostError(Exception):
    pass


class EasyPostClient:
    """Client for the EasyPost tracker API"""

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.EASYPOST_API_KEY
        self.base_url = 'https://api.easypost.com/v2'
        self.timeout = 10

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _make_request(self, method: str, endpoint: str, **kwargs) -> Dict[str, Any]:
        """
        Call the API with basic auth (key as username); raise EasyPostError on
        missing config, network failure or a non-2xx answer
        """
        if not self.is_configured():
            raise EasyPostError("EasyPost API key not configured")

        url = f"{self.base_url}/{endpoint}"
        try:
            response = requests.request(method, url, auth=(self.api_key, ''), timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response.json()
        except RequestException as e:
            logger.error(f"EasyPost API request failed: {str(e)}")
            raise EasyPostError(str(e)) from e

    def create_tracker(self, tracking_code: str, carrier: Optional[str] = None) -> Dict[str, Any]:
        """Register a tracking code so EasyPost starts sending webhooks for it"""
        tracker = {'tracking_code': tracking_code}
        if carrier:
            tracker['carrier'] = carrier
        return self._make_request('POST', 'trackers', json={'tracker': tracker})

    def get_tracker(self, tracker_id_or_code: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a tracker by id, falling back to a lookup by tracking code.
        Answers are cached for a minute.
        """
        cache_key = f"easypost_tracker_{tracker_id_or_code}"
        cached = cache.get(cache_key)
        if cached:
            return cached

        try:
            tracker = self._make_request('GET', f"trackers/{tracker_id_or_code}")
        except EasyPostError:
            found = self._make_request(
                'GET', 'trackers',
                params={'tracking_code': tracker_id_or_code, 'page_size': 10},
            )
            trackers = found.get('trackers') or []
            tracker = trackers[0] if trackers else None

        if tracker:
            cache.set(cache_key, tracker, 60)
        return tracker
