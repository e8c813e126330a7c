from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

# coarse lifecycle
PENDING = 'Pending'
PROCESSING = 'Processing'
SHIPPED = 'Shipped'
DELIVERED = 'Delivered'
CANCELLED = 'Cancelled'

ORDER_STATUS_CHOICES = [
    (PENDING, 'Pending'),
    (PROCESSING, 'Processing'),
    (SHIPPED, 'Shipped'),
    (DELIVERED, 'Delivered'),
    (CANCELLED, 'Cancelled'),
]

# carrier level, finer grained
LABEL_CREATED = 'Label Created'
IN_TRANSIT = 'In Transit'
OUT_FOR_DELIVERY = 'Out for Delivery'
EXCEPTION = 'Exception'

TRACKING_STATUS_CHOICES = [
    (LABEL_CREATED, 'Label Created'),
    (IN_TRANSIT, 'In Transit'),
    (OUT_FOR_DELIVERY, 'Out for Delivery'),
    (DELIVERED, 'Delivered'),
    (EXCEPTION, 'Exception'),
    (CANCELLED, 'Cancelled'),
]

ORDER_STATUSES = [value for value, _ in ORDER_STATUS_CHOICES]
TRACKING_STATUSES = [value for value, _ in TRACKING_STATUS_CHOICES]


class Order(models.Model):
    # null so order history survives a permanent user delete
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='orders')

    shipping_address = models.JSONField()  # {"street", "city", "postal_code", "country"}
    payment_method = models.CharField(max_length=50)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)

    order_status = models.CharField(max_length=20, choices=ORDER_STATUS_CHOICES, default=PENDING)
    is_paid = models.BooleanField(default=False)
    paid_at = models.DateTimeField(null=True, blank=True)
    payment_reference = models.CharField(max_length=100, blank=True, default='')
    shipped_at = models.DateTimeField(null=True, blank=True)

    tracking_number = models.CharField(max_length=64, blank=True, default='', db_index=True)
    carrier = models.CharField(max_length=50, blank=True, default='')
    tracking_url = models.URLField(max_length=500, blank=True, default='')
    tracking_status = models.CharField(max_length=20, choices=TRACKING_STATUS_CHOICES, default=LABEL_CREATED)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        owner = self.user.email if self.user else 'deleted user'
        return f"Order {self.pk} for {owner} ({self.order_status})"

    def is_owned_by(self, user):
        return self.user_id is not None and self.user_id == user.pk


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey('catalog.Product', on_delete=models.SET_NULL, null=True, related_name='order_items')

    # snapshot at purchase time, product can change later
    name = models.CharField(max_length=200)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    def __str__(self):
        return f"{self.quantity} x {self.name}"

    @property
    def line_total(self):
        return self.price * self.quantity
