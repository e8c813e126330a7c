from decimal import Decimal

import pytest

from catalog.models import Product
from orders.models import Order
from orders.services import InsufficientStock, ProductNotFound, place_order

pytestmark = pytest.mark.django_db

ADDRESS = {'street': '1 High St', 'city': 'London', 'postal_code': 'N1 1AA', 'country': 'UK'}


def test_place_order_decrements_stock_and_snapshots(customer, product):
    order = place_order(customer, [{'product_id': product.pk, 'quantity': 3}], ADDRESS, 'Paystack')

    product.refresh_from_db()
    assert product.stock_quantity == 7
    assert order.total_amount == Decimal('29.97')
    item = order.items.get()
    assert (item.name, item.price, item.quantity) == (product.name, product.price, 3)
    assert order.order_status == 'Pending'


def test_duplicate_lines_are_merged(customer, product):
    order = place_order(customer, [
        {'product_id': product.pk, 'quantity': 4},
        {'product_id': product.pk, 'quantity': 4},
    ], ADDRESS, 'Paystack')

    assert order.items.get().quantity == 8
    product.refresh_from_db()
    assert product.stock_quantity == 2


def test_insufficient_stock_rolls_back_everything(customer, product):
    other = Product.objects.create(name='Magnesium', price='4.00', stock_quantity=1)

    with pytest.raises(InsufficientStock) as exc:
        place_order(customer, [
            {'product_id': product.pk, 'quantity': 2},
            {'product_id': other.pk, 'quantity': 5},
        ], ADDRESS, 'Paystack')

    assert str(exc.value) == 'Insufficient stock for Magnesium. Available: 1, Requested: 5'
    assert Order.objects.count() == 0
    product.refresh_from_db()
    other.refresh_from_db()
    assert (product.stock_quantity, other.stock_quantity) == (10, 1)


def test_unknown_product(customer):
    with pytest.raises(ProductNotFound):
        place_order(customer, [{'product_id': 999, 'quantity': 1}], ADDRESS, 'Paystack')


def test_create_order_api(customer_client, product):
    response = customer_client.post('/api/orders/', {
        'order_items': [{'product_id': product.pk, 'quantity': 2}],
        'shipping_address': ADDRESS,
        'payment_method': 'Paystack',
        'total_amount': '0.01',
    }, format='json')

    assert response.status_code == 201
    # client-sent totals are ignored
    assert response.data['total_amount'] == Decimal('19.98')
    assert response.data['items'][0]['quantity'] == 2
    assert response.data['tracking_history'] == []


def test_create_order_api_errors(customer_client, product):
    response = customer_client.post('/api/orders/', {'order_items': []}, format='json')
    assert response.status_code == 400
    assert response.data['message'] == 'No order items'

    response = customer_client.post('/api/orders/', {
        'order_items': [{'product_id': product.pk, 'quantity': 50}],
        'shipping_address': ADDRESS,
        'payment_method': 'Paystack',
    }, format='json')
    assert response.status_code == 400
    assert response.data['message'].startswith('Insufficient stock for')


def test_my_orders_only_lists_own(customer_client, order, other_customer, product):
    place_order(other_customer, [{'product_id': product.pk, 'quantity': 1}], ADDRESS, 'Paystack')

    response = customer_client.get('/api/orders/myorders/')

    assert response.data['total'] == 1
    assert response.data['orders'][0]['id'] == order.pk


def test_order_detail_access(api_client, customer_client, admin_client, other_customer, order):
    assert customer_client.get(f'/api/orders/{order.pk}/').status_code == 200
    assert admin_client.get(f'/api/orders/{order.pk}/').status_code == 200

    api_client.force_authenticate(user=other_customer)
    assert api_client.get(f'/api/orders/{order.pk}/').status_code == 403


def test_all_orders_admin_only(customer_client, admin_client, order):
    assert customer_client.get('/api/orders/').status_code == 403

    response = admin_client.get('/api/orders/')
    assert response.data['total'] == 1
    assert response.data['orders'][0]['status'] == 'pending'
    assert response.data['orders'][0]['user']['email'] == 'jane@example.com'


def test_admin_status_update(admin_client, customer_client, order):
    response = admin_client.put(f'/api/orders/{order.pk}/', {'status': 'processing'}, format='json')
    assert response.status_code == 200
    order.refresh_from_db()
    assert order.order_status == 'Processing'

    assert admin_client.put(f'/api/orders/{order.pk}/', {'status': 'lost'}, format='json').status_code == 400
    assert customer_client.put(f'/api/orders/{order.pk}/', {'status': 'delivered'}, format='json').status_code == 403


def test_tracking_update_defaults_to_label_created(admin_client, order):
    response = admin_client.put(f'/api/orders/{order.pk}/tracking/', {
        'tracking_number': '123456789012',
        'carrier': 'FedEx',
    }, format='json')

    assert response.status_code == 200
    data = response.data['order']
    assert data['tracking_status'] == 'Label Created'
    assert data['order_status'] == 'Shipped'
    assert data['tracking_url'] == 'https://tracking.fedex.com/en/tracking/123456789012'
    assert data['shipped_at'] is None
    assert len(data['tracking_history']) == 1


def test_tracking_update_with_url_means_in_transit(admin_client, order):
    response = admin_client.put(f'/api/orders/{order.pk}/tracking/', {
        'tracking_number': 'ABC123',
        'carrier': 'Local Courier',
        'tracking_url': 'https://courier.example.com/t/ABC123',
        'location': 'Leeds depot',
    }, format='json')

    data = response.data['order']
    assert data['tracking_status'] == 'In Transit'
    assert data['shipped_at'] is not None
    assert data['tracking_history'][0]['location'] == 'Leeds depot'


def test_tracking_update_validation(admin_client, customer_client, order):
    response = admin_client.put(f'/api/orders/{order.pk}/tracking/', {
        'tracking_number': 'not-a-ups-number',
        'carrier': 'UPS',
    }, format='json')
    assert response.status_code == 400

    response = admin_client.put(f'/api/orders/{order.pk}/tracking/', {'status': 'Teleported'}, format='json')
    assert response.status_code == 400

    assert customer_client.put(f'/api/orders/{order.pk}/tracking/', {}, format='json').status_code == 403
