from django.urls import path
from . import api_views

app_name = 'orders'

urlpatterns = [
    path('', api_views.order_list, name='list'),
    path('myorders/', api_views.my_orders, name='mine'),
    path('<int:pk>/', api_views.order_detail, name='detail'),
    path('<int:pk>/tracking/', api_views.order_tracking_update, name='tracking'),
]
