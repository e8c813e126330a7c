from django.urls import path
from . import api_views

app_name = 'admin_tracking'

urlpatterns = [
    path('tracking/carriers/', api_views.carrier_list, name='carriers'),
    path('bulk-assign-tracking/', api_views.bulk_assign_tracking, name='bulk_assign'),
    path('<int:pk>/auto-assign-tracking/', api_views.auto_assign_tracking, name='auto_assign'),
]
