"""
URL configuration for the store project.

Every API app is mounted under /api/. The Django admin stays available for
back-office edits at /storeadmin/.
"""
from django.conf import settings
from django.contrib import admin
from django.http import HttpResponse
from django.urls import include, path


def index(request):
    return HttpResponse("Vitabiotics API is running...")


urlpatterns = [
    path('', index, name='index'),
    path('storeadmin/', admin.site.urls),
    path('api/users/', include('users.urls', namespace='users')),
    path('api/admin/users/', include('users.admin_urls', namespace='admin_users')),
    path('api/products/', include('catalog.urls', namespace='catalog')),
    path('api/orders/', include('orders.urls', namespace='orders')),
    path('api/quiz/', include('quiz.urls', namespace='quiz')),
    path('api/payments/', include('payments.urls', namespace='payments')),
    path('api/tracking/', include('tracking.urls', namespace='tracking')),
    path('api/shipping/', include('tracking.shipping_urls', namespace='shipping')),
    path('api/admin/orders/', include('tracking.admin_urls', namespace='admin_tracking')),
]

# token inspection is for local debugging only
if settings.DEBUG:
    urlpatterns += [
        path('api/debug/', include('users.debug_urls', namespace='debug')),
    ]
