from django.contrib import admin
from .models import TrackingEvent


@admin.register(TrackingEvent)
class TrackingEventAdmin(admin.ModelAdmin):
    list_display = ['order', 'status', 'location', 'source', 'timestamp']
    list_filter = ['status', 'source']
    search_fields = ['order__tracking_number', 'message']

    # history is append-only, admin can look but not touch
    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
