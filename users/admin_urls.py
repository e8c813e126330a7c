from django.urls import path
from . import api_views

app_name = 'admin_users'

urlpatterns = [
    path('', api_views.admin_user_list, name='list'),
    path('<int:pk>/', api_views.admin_user_detail, name='detail'),
    path('<int:pk>/restore/', api_views.admin_user_restore, name='restore'),
    path('<int:pk>/permanent/', api_views.admin_user_delete_permanent, name='delete_permanent'),
    path('<int:pk>/message/', api_views.admin_user_message, name='message'),
]
