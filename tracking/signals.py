from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from notifications.dispatch import notify_order_owner
from .models import TrackingEvent


@receiver(post_save, sender=TrackingEvent)
def notify_on_tracking_event(sender, instance, created, **kwargs):
    if not created:
        return
    order = instance.order
    entry = instance.as_entry()
    # after commit: rolled back entries never reach the customer, and no
    # send runs while record_event holds the order row lock
    transaction.on_commit(lambda: notify_order_owner(order, entry))
