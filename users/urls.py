from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView
from .api_views import EmailTokenObtainPairView
from . import api_views


app_name = 'users'

urlpatterns = [
    path('register/', api_views.register_view, name='register'),
    path('login/', EmailTokenObtainPairView.as_view(), name='login'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('profile/', api_views.profile_view, name='profile'),
]
