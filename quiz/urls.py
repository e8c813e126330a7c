from django.urls import path
from . import api_views

app_name = 'quiz'

urlpatterns = [
    path('submit/', api_views.submit_quiz, name='submit'),
    path('recommendations/', api_views.recommendations, name='recommendations'),
]
