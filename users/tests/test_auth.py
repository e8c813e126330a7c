from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError

User = get_user_model()

pytestmark = pytest.mark.django_db


def test_register_returns_profile_and_tokens(api_client):
    response = api_client.post('/api/users/register/', {
        'first_name': 'Jane',
        'last_name': 'Doe',
        'email': 'Jane@Example.com',
        'password': 'S3cure-pass!',
    }, format='json')

    assert response.status_code == 201
    assert response.data['email'] == 'jane@example.com'
    assert response.data['role'] == 'user'
    assert response.data['token']
    assert response.data['refresh']


def test_register_missing_fields(api_client):
    response = api_client.post('/api/users/register/', {'email': 'x@example.com'}, format='json')
    assert response.status_code == 400
    assert response.data['message'] == 'Please enter all fields'


def test_register_duplicate_email(api_client, customer):
    response = api_client.post('/api/users/register/', {
        'first_name': 'Jane',
        'last_name': 'Again',
        'email': customer.email,
        'password': 'S3cure-pass!',
    }, format='json')
    assert response.status_code == 400
    assert response.data['message'] == 'User already exists'


def test_login_with_email(api_client, customer):
    response = api_client.post('/api/users/login/', {
        'email': 'jane@example.com',
        'password': 'S3cure-pass!',
    }, format='json')

    assert response.status_code == 200
    assert response.data['token']
    assert response.data['email'] == customer.email


def test_login_wrong_password(api_client, customer):
    response = api_client.post('/api/users/login/', {
        'email': customer.email,
        'password': 'wrong',
    }, format='json')
    assert response.status_code == 401


def test_disabled_user_cannot_log_in(api_client, customer):
    customer.disabled = True
    customer.save()
    response = api_client.post('/api/users/login/', {
        'email': customer.email,
        'password': 'S3cure-pass!',
    }, format='json')
    assert response.status_code == 401


def test_token_authenticates_profile(api_client, customer):
    login = api_client.post('/api/users/login/', {
        'email': customer.email,
        'password': 'S3cure-pass!',
    }, format='json')
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['token']}")

    response = api_client.get('/api/users/profile/')
    assert response.status_code == 200
    assert response.data['first_name'] == 'Jane'


def test_profile_update_returns_new_token(customer_client, customer):
    response = customer_client.put('/api/users/profile/', {'phone': '+447700900999', 'role': 'admin'}, format='json')

    assert response.status_code == 200
    assert response.data['token']
    customer.refresh_from_db()
    assert customer.phone == '+447700900999'
    # role is read-only for customers
    assert customer.role == 'user'


def test_profile_requires_auth(api_client):
    assert api_client.get('/api/users/profile/').status_code == 401


def test_make_admin_command(customer):
    call_command('make_admin', customer.email, '--staff')
    customer.refresh_from_db()
    assert customer.is_admin
    assert customer.is_staff


def test_make_admin_unknown_email():
    with pytest.raises(CommandError):
        call_command('make_admin', 'nobody@example.com')


def test_list_users_command_filters_by_role(customer, admin_user):
    out = StringIO()
    call_command('list_users', '--role', 'admin', stdout=out)

    output = out.getvalue()
    assert 'Total Users: 1' in output
    assert admin_user.email in output
    assert customer.email not in output
