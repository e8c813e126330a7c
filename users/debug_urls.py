from django.urls import path
from . import api_views

app_name = 'debug'

urlpatterns = [
    path('token/', api_views.inspect_token, name='inspect_token'),
]
