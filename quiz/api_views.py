import logging

from django.db import transaction
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from catalog.serializers import ProductSerializer
from .recommendations import recommend_for_goals
from .serializers import QuizSubmissionSerializer

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def submit_quiz(request):
    if not request.data.get('selected_goals') or not request.data.get('age'):
        return Response({'message': 'Missing required quiz fields.'}, status=status.HTTP_400_BAD_REQUEST)

    serializer = QuizSubmissionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    with transaction.atomic():
        quiz_result = serializer.save(user=request.user)
        # the latest quiz drives recommendations
        request.user.health_goals = quiz_result.selected_goals
        request.user.save(update_fields=['health_goals', 'updated_at'])

    logger.info(f"Quiz saved for {request.user.email}: {quiz_result.selected_goals}")
    return Response({
        'message': 'Quiz submitted successfully. Profile updated.',
        'quiz_id': quiz_result.pk,
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def recommendations(request):
    goals = request.user.health_goals or []
    if not goals:
        return Response({'message': 'No goals set. Please take the quiz.', 'recommendations': []})

    products = recommend_for_goals(goals)
    return Response({
        'message': f"Found {len(products)} recommendations matching your goals: {', '.join(goals)}",
        'recommendations': ProductSerializer(products, many=True).data,
    })
