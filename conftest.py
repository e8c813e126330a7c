import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from notifications import sms

User = get_user_model()


@pytest.fixture(autouse=True)
def notification_test_mode(settings):
    settings.NOTIFICATIONS_TEST_MODE = True
    settings.NOTIFICATIONS_ASYNC = False
    settings.SMS_BACKEND = 'notifications.sms.LocmemBackend'
    settings.EASYPOST_API_KEY = ''
    settings.EASYPOST_WEBHOOK_SECRET = ''
    settings.PAYSTACK_SECRET_KEY = ''
    settings.PAYSTACK_PUBLIC_KEY = ''
    sms.reset_outbox()
    yield
    sms.reset_outbox()


@pytest.fixture
def customer(db):
    return User.objects.create_user(
        email='jane@example.com',
        password='S3cure-pass!',
        first_name='Jane',
        last_name='Doe',
        phone='+447700900123',
    )


@pytest.fixture
def other_customer(db):
    return User.objects.create_user(
        email='bob@example.com',
        password='S3cure-pass!',
        first_name='Bob',
        last_name='Smith',
    )


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='admin@example.com',
        password='S3cure-pass!',
        first_name='Ada',
        last_name='Admin',
        role=User.ROLE_ADMIN,
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def customer_client(customer):
    client = APIClient()
    client.force_authenticate(user=customer)
    return client


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def product(db):
    from catalog.models import Product
    return Product.objects.create(
        name='Vitamin D3 1000IU',
        description='Daily vitamin D',
        price='9.99',
        category='Vitamins',
        stock_quantity=10,
        key_benefits=['Immunity', 'Energy'],
        average_rating=4.5,
    )


@pytest.fixture
def order(customer, product):
    from orders.services import place_order
    return place_order(
        customer,
        [{'product_id': product.pk, 'quantity': 2}],
        {'street': '1 High St', 'city': 'London', 'postal_code': 'N1 1AA', 'country': 'UK'},
        'Paystack',
    )
