from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):

    ordering = ['email']
    list_display = ['email', 'first_name', 'last_name', 'role', 'is_staff', 'disabled']
    list_filter = ['role', 'disabled', 'is_staff']
    search_fields = ['email', 'first_name', 'last_name', 'phone']
    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        (_('Profile'), {'fields': ('first_name', 'last_name', 'phone', 'avatar_url', 'health_goals')}),
        (_('Permissions'), {'fields': ('role', 'disabled', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        (_('Important dates'), {'fields': ('last_login', 'date_joined')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'first_name', 'last_name', 'password1', 'password2'),
        }),
    )
