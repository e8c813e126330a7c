from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

# must line up with Product.key_benefits
HEALTH_GOALS = ['Energy', 'Immunity', 'Joint Health', 'Sleep', 'Digestion', 'Stress']

MIN_AGE = 18


class QuizResult(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='quiz_results')
    date_taken = models.DateTimeField(default=timezone.now)
    selected_goals = models.JSONField(default=list)
    dietary_restrictions = models.JSONField(default=list, blank=True)  # ["Vegan", "Gluten-Free"]
    age = models.PositiveIntegerField(validators=[MinValueValidator(MIN_AGE)])
    score = models.IntegerField(default=0)  # for recommendation weighting later

    class Meta:
        ordering = ['-date_taken']

    def __str__(self):
        return f"Quiz for {self.user.email} @ {self.date_taken}"
