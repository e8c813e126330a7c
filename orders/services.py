import logging
from collections import OrderedDict
from decimal import Decimal

from django.db import transaction
from django.db.models import F

from catalog.models import Product
from .models import Order, OrderItem

logger = logging.getLogger(__name__)


class OrderError(Exception):
    """Order could not be placed; message is safe to show the customer."""


class ProductNotFound(OrderError):
    pass


class InsufficientStock(OrderError):
    pass


def _merge_lines(items):
    # the same product twice in one cart counts as one line
    merged = OrderedDict()
    for item in items:
        product_id = int(item['product_id'])
        merged[product_id] = merged.get(product_id, 0) + int(item['quantity'])
    return merged


def place_order(user, items, shipping_address, payment_method):
    """
    Check stock, decrement it and create the order in one transaction.

    Product rows are locked for the duration, so two concurrent orders for
    the last unit cannot both succeed. Any failure rolls everything back.
    The total is computed from current product prices, never taken from
    the client.
    """
    lines = _merge_lines(items)

    with transaction.atomic():
        products = Product.objects.select_for_update().in_bulk(list(lines))

        for product_id, quantity in lines.items():
            product = products.get(product_id)
            if product is None:
                raise ProductNotFound(f"Product not found for ID: {product_id}")
            if product.stock_quantity < quantity:
                raise InsufficientStock(
                    f"Insufficient stock for {product.name}. "
                    f"Available: {product.stock_quantity}, Requested: {quantity}"
                )

        total = sum(
            (products[product_id].price * quantity for product_id, quantity in lines.items()),
            Decimal('0'),
        )
        order = Order.objects.create(
            user=user,
            shipping_address=dict(shipping_address),
            payment_method=payment_method,
            total_amount=total,
        )
        OrderItem.objects.bulk_create([
            OrderItem(
                order=order,
                product=products[product_id],
                name=products[product_id].name,
                price=products[product_id].price,
                quantity=quantity,
            )
            for product_id, quantity in lines.items()
        ])
        for product_id, quantity in lines.items():
            Product.objects.filter(pk=product_id).update(stock_quantity=F('stock_quantity') - quantity)

    logger.info(f"Order {order.pk} placed by {user.email}: {len(lines)} line(s), total {total}")
    return order
