from django.db import models
from django.utils import timezone

from orders.models import TRACKING_STATUS_CHOICES

SOURCE_ADMIN = 'admin'
SOURCE_WEBHOOK = 'webhook'
SOURCE_POLLER = 'poller'
SOURCE_TRACKER = 'tracker'

SOURCE_CHOICES = [
    (SOURCE_ADMIN, 'Admin'),
    (SOURCE_WEBHOOK, 'Carrier webhook'),
    (SOURCE_POLLER, 'Poller'),
    (SOURCE_TRACKER, 'Tracker link'),
]


class TrackingEvent(models.Model):
    """One entry in an order's tracking history. Never edited once written."""

    order = models.ForeignKey('orders.Order', on_delete=models.CASCADE, related_name='tracking_history')
    status = models.CharField(max_length=20, choices=TRACKING_STATUS_CHOICES)
    location = models.CharField(max_length=255, blank=True, default='')
    message = models.TextField(blank=True, default='')
    source = models.CharField(max_length=20, choices=SOURCE_CHOICES, default=SOURCE_ADMIN)
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ['timestamp', 'id']

    def __str__(self):
        return f"Order {self.order_id}: {self.status} @ {self.timestamp:%Y-%m-%d %H:%M}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Tracking history is append-only")
        super().save(*args, **kwargs)

    def as_entry(self):
        return {
            'status': self.status,
            'location': self.location,
            'message': self.message,
            'timestamp': self.timestamp.isoformat(),
        }
