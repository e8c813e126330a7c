import logging

from rest_framework.exceptions import ValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _first_message(detail):
    # drill into serializer errors for something readable
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
    if isinstance(detail, (list, tuple)) and detail:
        return _first_message(detail[0])
    return str(detail)


def api_exception_handler(exc, context):
    """Render DRF errors as {"message": ...} like the rest of the API."""
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.data = {
            'message': _first_message(exc.detail),
            'errors': exc.detail,
        }
    else:
        detail = response.data.get('detail', response.data) if isinstance(response.data, dict) else response.data
        response.data = {'message': _first_message(detail)}

    if response.status_code >= 500:
        logger.error(f"API error in {context.get('view')}: {exc}")
    return response
