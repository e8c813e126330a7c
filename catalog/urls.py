from django.urls import path
from . import api_views

app_name = 'catalog'

urlpatterns = [
    path('', api_views.product_list, name='product_list'),
    path('<str:id_or_slug>/', api_views.product_detail, name='product_detail'),
]
