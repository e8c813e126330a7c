from rest_framework import serializers

from tracking.serializers import TrackingEventSerializer
from .models import ORDER_STATUSES, Order, OrderItem


class ShippingAddressSerializer(serializers.Serializer):
    street = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=100)
    postal_code = serializers.CharField(max_length=20)
    country = serializers.CharField(max_length=100)


class OrderLineSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class PlaceOrderSerializer(serializers.Serializer):
    order_items = OrderLineSerializer(many=True, allow_empty=False)
    shipping_address = ShippingAddressSerializer()
    payment_method = serializers.CharField(max_length=50)


class OrderItemSerializer(serializers.ModelSerializer):
    price = serializers.DecimalField(max_digits=10, decimal_places=2, coerce_to_string=False)

    class Meta:
        model = OrderItem
        fields = ['id', 'product', 'name', 'price', 'quantity']


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    tracking_history = TrackingEventSerializer(many=True, read_only=True)
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)
    user = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id', 'user', 'items', 'shipping_address', 'payment_method', 'total_amount',
            'order_status', 'is_paid', 'paid_at', 'shipped_at',
            'tracking_number', 'carrier', 'tracking_url', 'tracking_status', 'tracking_history',
            'created_at', 'updated_at',
        ]

    def get_user(self, order):
        if order.user is None:
            return None
        return {
            'id': order.user.pk,
            'email': order.user.email,
            'first_name': order.user.first_name,
            'last_name': order.user.last_name,
        }


class AdminOrderSerializer(OrderSerializer):
    # the admin dashboard filters on a lowercase status
    status = serializers.SerializerMethodField()

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ['status']

    def get_status(self, order):
        return order.order_status.lower()


def normalize_order_status(value):
    """'shipped' / 'SHIPPED' -> 'Shipped'; None when not a known status."""
    if not isinstance(value, str):
        return None
    candidate = value.strip().capitalize()
    return candidate if candidate in ORDER_STATUSES else None
