from rest_framework import serializers

from .models import HEALTH_GOALS, MIN_AGE, QuizResult


class QuizSubmissionSerializer(serializers.ModelSerializer):
    selected_goals = serializers.ListField(
        child=serializers.ChoiceField(choices=HEALTH_GOALS),
        allow_empty=False,
    )
    dietary_restrictions = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    age = serializers.IntegerField(min_value=MIN_AGE)

    class Meta:
        model = QuizResult
        fields = ['id', 'selected_goals', 'dietary_restrictions', 'age', 'score', 'date_taken']
        read_only_fields = ['id', 'score', 'date_taken']

    def validate_selected_goals(self, value):
        # keep first-seen order, drop repeats
        return list(dict.fromkeys(value))
