import logging
from decimal import Decimal

from django.conf import settings
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from orders.models import Order
from users.permissions import IsAdminRole
from .paystack import PaystackClient, PaystackError, PaystackNotConfigured, mask_key

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([AllowAny])
def initialize(request):
    public_key = settings.PAYSTACK_PUBLIC_KEY
    if not public_key:
        return Response(
            {'success': False, 'message': 'Paystack public key not configured'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return Response({'success': True, 'public_key': public_key})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def verify_paystack(request):
    reference = (request.data.get('reference') or '').strip()
    order_id = request.data.get('order_id')

    if not reference:
        return Response({'success': False, 'message': 'Reference is required'}, status=status.HTTP_400_BAD_REQUEST)

    order = None
    if order_id:
        if not str(order_id).isdigit():
            return Response({'success': False, 'message': 'Invalid order id'}, status=status.HTTP_400_BAD_REQUEST)
        order = get_object_or_404(Order, pk=order_id)
        if not (order.is_owned_by(request.user) or request.user.is_admin):
            raise PermissionDenied('Not authorized to pay for this order')

    try:
        result = PaystackClient().verify_transaction(reference)
    except PaystackNotConfigured as e:
        return Response({'success': False, 'message': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    except PaystackError as e:
        return Response(
            {'success': False, 'message': 'Error verifying payment', 'error': str(e)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if not result['verified']:
        return Response(
            {'success': False, 'message': 'Payment verification failed', 'status': result['status']},
            status=status.HTTP_400_BAD_REQUEST,
        )

    if order is not None:
        # paystack amounts are in the minor unit
        if result['amount'] is not None and Decimal(result['amount']) < order.total_amount * 100:
            return Response(
                {'success': False, 'message': 'Payment amount does not cover the order total'},
                status=status.HTTP_400_BAD_REQUEST,
            )
        if not order.is_paid:
            order.is_paid = True
            order.paid_at = timezone.now()
            order.payment_reference = result['reference']
            order.save(update_fields=['is_paid', 'paid_at', 'payment_reference', 'updated_at'])
            logger.info(f"Order {order.pk} marked paid (ref {result['reference']})")

    return Response({
        'success': True,
        'message': 'Payment verified successfully',
        'reference': result['reference'],
        'amount': result['amount'],
        'customer_email': result['customer_email'],
        'order_id': order.pk if order else None,
    })


@api_view(['GET'])
@permission_classes([IsAdminRole])
def paystack_status(request):
    logger.info(f"Paystack status requested by admin: {request.user.email}")
    public_key = settings.PAYSTACK_PUBLIC_KEY
    secret_key = settings.PAYSTACK_SECRET_KEY
    return Response({
        'success': True,
        'has_public': bool(public_key),
        'has_secret': bool(secret_key),
        'masked_public': mask_key(public_key),
        'masked_secret': '****** (configured)' if secret_key else None,
    })
