import json
import logging

from django.conf import settings
from django.http import HttpResponse, HttpResponseBadRequest
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from orders.models import LABEL_CREATED, PROCESSING, Order
from users.permissions import IsAdminRole
from . import carriers
from .easypost import EasyPostClient, EasyPostError
from .models import SOURCE_TRACKER, SOURCE_WEBHOOK
from .serializers import PublicTrackingSerializer
from .services import assign_tracking, record_event, refresh_from_provider
from .webhooks import normalize_status, parse_update, signature_from_headers, verify_signature

logger = logging.getLogger(__name__)


def _assignment_summary(order):
    return {
        'id': order.pk,
        'tracking_number': order.tracking_number,
        'carrier': order.carrier,
        'tracking_url': order.tracking_url,
        'tracking_status': order.tracking_status,
    }


# --- public ---

@api_view(['GET'])
@permission_classes([AllowAny])
def lookup_tracking(request, tracking_number):
    tracked = Order.objects.prefetch_related('tracking_history').filter(tracking_number=tracking_number)
    order = tracked.first()
    if order is None:
        return Response({'message': 'Tracking number not found'}, status=status.HTTP_404_NOT_FOUND)

    if refresh_from_provider(order):
        order = tracked.get(pk=order.pk)
    return Response(PublicTrackingSerializer(order).data)


# --- admin ---

@api_view(['POST'])
@permission_classes([IsAdminRole])
def auto_assign_tracking(request, pk):
    order = get_object_or_404(Order, pk=pk)
    carrier = request.query_params.get('carrier') or None
    if carrier is not None and carrier not in carriers.SUPPORTED_CARRIERS:
        return Response(
            {'message': f"Unsupported carrier. Use one of: {', '.join(carriers.SUPPORTED_CARRIERS)}"},
            status=status.HTTP_400_BAD_REQUEST,
        )

    order, _ = assign_tracking(order, carrier)
    return Response({'message': 'Tracking assigned successfully', 'order': _assignment_summary(order)})


@api_view(['POST'])
@permission_classes([IsAdminRole])
def bulk_assign_tracking(request):
    order_ids = request.data.get('order_ids')
    carrier = request.data.get('carrier') or None

    if not isinstance(order_ids, list) or not order_ids:
        return Response({'message': 'order_ids must be a non-empty list'}, status=status.HTTP_400_BAD_REQUEST)
    if carrier is not None and carrier not in carriers.SUPPORTED_CARRIERS:
        return Response({'message': f"Unsupported carrier: {carrier}"}, status=status.HTTP_400_BAD_REQUEST)

    results = []
    for order_id in order_ids:
        order = Order.objects.filter(pk=order_id).first() if str(order_id).isdigit() else None
        if order is None:
            results.append({'order_id': order_id, 'success': False, 'message': 'Order not found'})
            continue
        order, _ = assign_tracking(order, carrier)
        results.append({
            'order_id': order.pk,
            'success': True,
            'tracking': {'number': order.tracking_number, 'carrier': order.carrier},
        })

    return Response({'message': 'Bulk tracking assignment complete', 'results': results})


@api_view(['GET'])
@permission_classes([IsAdminRole])
def carrier_list(request):
    return Response({'carriers': carriers.SUPPORTED_CARRIERS})


# --- shipping provider ---

@api_view(['POST'])
@permission_classes([IsAdminRole])
def create_shipment_tracker(request):
    """Link a tracking number to an order and register it with EasyPost when configured."""
    order_id = request.data.get('order_id')
    tracking_number = (request.data.get('tracking_number') or '').strip()
    carrier = (request.data.get('carrier') or '').strip()

    if not order_id or not tracking_number:
        return Response({'message': 'order_id and tracking_number required'}, status=status.HTTP_400_BAD_REQUEST)
    if not str(order_id).isdigit():
        return Response({'message': 'Invalid order id'}, status=status.HTTP_400_BAD_REQUEST)
    order = get_object_or_404(Order, pk=order_id)

    carrier = carrier or carriers.detect_carrier(tracking_number) or order.carrier

    tracker = None
    client = EasyPostClient()
    if client.is_configured():
        try:
            tracker = client.create_tracker(tracking_number, carrier or None)
        except EasyPostError as e:
            logger.warning(f"EasyPost tracker create failed for order {order.pk} (continuing): {e}")

    if tracker:
        entry_status = normalize_status(tracker.get('status')) if tracker.get('status') else LABEL_CREATED
        url = tracker.get('public_url') or carriers.tracking_url(tracking_number, carrier)
        message = 'Tracker created via EasyPost'
    else:
        entry_status = LABEL_CREATED
        url = carriers.tracking_url(tracking_number, carrier)
        message = 'Tracker created (no carrier API)'

    order, _ = record_event(
        order,
        entry_status,
        message=message,
        source=SOURCE_TRACKER,
        order_status=PROCESSING if entry_status == LABEL_CREATED else None,
        tracking_number=tracking_number,
        carrier=carrier,
        tracking_url=url,
    )
    return Response({'message': 'Tracker linked', 'order': _assignment_summary(order), 'tracker': tracker})


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def shipping_webhook(request):
    # signature covers the exact bytes received, read them before parsing
    raw_body = request.body
    signature = signature_from_headers(request.headers)

    if not verify_signature(raw_body, signature, settings.EASYPOST_WEBHOOK_SECRET):
        logger.warning("Invalid webhook signature")
        return HttpResponseBadRequest('Invalid webhook signature')

    try:
        payload = json.loads(raw_body or b'{}')
    except ValueError:
        return HttpResponseBadRequest('Invalid JSON')
    if not isinstance(payload, dict):
        return HttpResponseBadRequest('Invalid JSON')

    tracking_code, entry = parse_update(payload)
    if not tracking_code:
        logger.warning("Webhook missing tracking code")
        return HttpResponse('ok')

    order = Order.objects.filter(tracking_number=tracking_code).first()
    if order is None:
        logger.warning(f"Webhook: no order found for tracking code {tracking_code}")
        return HttpResponse('ok')

    # providers redeliver; the same entry twice in a row is dropped
    record_event(
        order,
        entry['status'],
        entry['location'],
        entry['message'],
        source=SOURCE_WEBHOOK,
        skip_if_same=True,
    )
    return HttpResponse('ok')
