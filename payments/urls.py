from django.urls import path
from . import api_views

app_name = 'payments'

urlpatterns = [
    path('initialize/', api_views.initialize, name='initialize'),
    path('verify-paystack/', api_views.verify_paystack, name='verify'),
    path('status/', api_views.paystack_status, name='status'),
]
