import logging

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from tracking import carriers
from tracking.services import record_event
from users.permissions import IsAdminRole
from .models import IN_TRANSIT, LABEL_CREATED, TRACKING_STATUSES, Order
from .serializers import (
    AdminOrderSerializer,
    OrderSerializer,
    PlaceOrderSerializer,
    normalize_order_status,
)
from .services import OrderError, place_order

logger = logging.getLogger(__name__)


def _orders_queryset():
    return Order.objects.select_related('user').prefetch_related('items', 'tracking_history')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def order_list(request):
    if request.method == 'GET':
        if not request.user.is_admin:
            raise PermissionDenied('Not authorized as an admin')
        orders = _orders_queryset()
        return Response({'orders': AdminOrderSerializer(orders, many=True).data, 'total': orders.count()})

    if not request.data.get('order_items'):
        return Response({'message': 'No order items'}, status=status.HTTP_400_BAD_REQUEST)

    serializer = PlaceOrderSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        order = place_order(
            request.user,
            data['order_items'],
            data['shipping_address'],
            data['payment_method'],
        )
    except OrderError as e:
        return Response({'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    order = _orders_queryset().get(pk=order.pk)
    return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_orders(request):
    orders = _orders_queryset().filter(user=request.user)
    return Response({'orders': OrderSerializer(orders, many=True).data, 'total': orders.count()})


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def order_detail(request, pk):
    order = get_object_or_404(_orders_queryset(), pk=pk)

    if request.method == 'GET':
        if not (order.is_owned_by(request.user) or request.user.is_admin):
            raise PermissionDenied('Not authorized to view this order')
        return Response(OrderSerializer(order).data)

    if not request.user.is_admin:
        raise PermissionDenied('Not authorized as an admin')

    new_status = normalize_order_status(request.data.get('status') or request.data.get('order_status'))
    if new_status is None:
        return Response({'message': 'Invalid order status'}, status=status.HTTP_400_BAD_REQUEST)

    order.order_status = new_status
    order.save(update_fields=['order_status', 'updated_at'])
    logger.info(f"Order {order.pk} status set to {new_status} by {request.user.email}")
    return Response(AdminOrderSerializer(order).data)


@api_view(['PUT'])
@permission_classes([IsAdminRole])
def order_tracking_update(request, pk):
    """Set carrier details and append a manual tracking entry."""
    order = get_object_or_404(Order, pk=pk)
    data = request.data

    tracking_number = (data.get('tracking_number') or '').strip()
    carrier = (data.get('carrier') or '').strip()
    tracking_url = (data.get('tracking_url') or '').strip()

    entry_status = data.get('status') or (IN_TRANSIT if tracking_url else LABEL_CREATED)
    if entry_status not in TRACKING_STATUSES:
        return Response(
            {'message': f"Invalid tracking status. Use one of: {', '.join(TRACKING_STATUSES)}"},
            status=status.HTTP_400_BAD_REQUEST,
        )

    if tracking_number and carrier in carriers.SUPPORTED_CARRIERS:
        if not carriers.validate_tracking_number(tracking_number, carrier):
            return Response(
                {'message': f"Tracking number does not match the {carrier} format"},
                status=status.HTTP_400_BAD_REQUEST,
            )

    fields = {}
    if tracking_number:
        fields['tracking_number'] = tracking_number
    if carrier:
        fields['carrier'] = carrier
    if tracking_url:
        fields['tracking_url'] = tracking_url
    elif tracking_number and carrier:
        fields['tracking_url'] = carriers.tracking_url(tracking_number, carrier)

    order, _ = record_event(
        order,
        entry_status,
        location=data.get('location') or '',
        message=data.get('message') or '',
        source='admin',
        **fields,
    )
    order = _orders_queryset().get(pk=order.pk)
    return Response({'message': 'Tracking updated', 'order': OrderSerializer(order).data})
