from unittest import mock

import pytest
import requests
from django.core.cache import cache

from tracking.easypost import EasyPostClient, EasyPostError


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


def test_not_configured():
    with pytest.raises(EasyPostError):
        EasyPostClient(api_key='').create_tracker('123456789012')


def test_get_tracker_by_id_is_cached():
    client = EasyPostClient(api_key='EZTK_test')

    with mock.patch('tracking.easypost.requests.request') as request:
        request.return_value.json.return_value = {'id': 'trk_1', 'status': 'delivered'}
        first = client.get_tracker('trk_1')
        second = client.get_tracker('trk_1')

    assert first == second == {'id': 'trk_1', 'status': 'delivered'}
    assert request.call_count == 1
    method, url = request.call_args.args
    assert (method, url) == ('GET', 'https://api.easypost.com/v2/trackers/trk_1')
    assert request.call_args.kwargs['auth'] == ('EZTK_test', '')


def test_get_tracker_falls_back_to_tracking_code():
    client = EasyPostClient(api_key='EZTK_test')
    not_found = mock.Mock()
    not_found.raise_for_status.side_effect = requests.HTTPError('404')
    listing = mock.Mock()
    listing.json.return_value = {'trackers': [{'id': 'trk_2', 'tracking_code': '1Z999AA10123456784'}]}

    with mock.patch('tracking.easypost.requests.request', side_effect=[not_found, listing]) as request:
        tracker = client.get_tracker('1Z999AA10123456784')

    assert tracker['id'] == 'trk_2'
    assert request.call_args.kwargs['params'] == {'tracking_code': '1Z999AA10123456784', 'page_size': 10}


def test_get_tracker_nothing_found():
    client = EasyPostClient(api_key='EZTK_test')
    not_found = mock.Mock()
    not_found.raise_for_status.side_effect = requests.HTTPError('404')
    empty = mock.Mock()
    empty.json.return_value = {'trackers': []}

    with mock.patch('tracking.easypost.requests.request', side_effect=[not_found, empty]):
        assert client.get_tracker('nope') is None
