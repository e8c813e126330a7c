from django.urls import path
from . import api_views

app_name = 'shipping'

urlpatterns = [
    path('create/', api_views.create_shipment_tracker, name='create'),
    path('webhook/', api_views.shipping_webhook, name='webhook'),
]
