from django.contrib import admin
from .models import QuizResult


@admin.register(QuizResult)
class QuizResultAdmin(admin.ModelAdmin):
    list_display = ['user', 'age', 'date_taken', 'score']
    search_fields = ['user__email']
    readonly_fields = ['date_taken']
