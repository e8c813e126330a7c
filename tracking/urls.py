from django.urls import path
from . import api_views

app_name = 'tracking'

urlpatterns = [
    path('<str:tracking_number>/', api_views.lookup_tracking, name='lookup'),
]
