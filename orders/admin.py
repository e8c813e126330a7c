from django.contrib import admin
from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ['product', 'name', 'price', 'quantity']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'order_status', 'tracking_status', 'carrier', 'tracking_number', 'is_paid', 'total_amount', 'created_at']
    list_filter = ['order_status', 'tracking_status', 'carrier', 'is_paid']
    search_fields = ['user__email', 'tracking_number']
    readonly_fields = ['created_at', 'updated_at', 'shipped_at', 'paid_at']
    inlines = [OrderItemInline]
