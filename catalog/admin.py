from django.contrib import admin
from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'price', 'stock_quantity', 'average_rating', 'updated_at']
    list_filter = ['category']
    search_fields = ['name', 'slug', 'scientific_name']
    prepopulated_fields = {'slug': ('name',)}
