import logging

import jwt
from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import UntypedToken
from rest_framework_simplejwt.views import TokenObtainPairView

from notifications.mailer import send_admin_message_email
from notifications.sms import send_sms
from .permissions import IsAdminRole
from .serializers import (
    AdminUserSerializer,
    EmailTokenObtainPairSerializer,
    RegisterSerializer,
    UserProfileSerializer,
    tokens_for,
)

User = get_user_model()
logger = logging.getLogger(__name__)

REGISTER_FIELDS = ('first_name', 'last_name', 'email', 'password')


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    if not all(request.data.get(field) for field in REGISTER_FIELDS):
        return Response({'message': 'Please enter all fields'}, status=status.HTTP_400_BAD_REQUEST)

    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    logger.info(f"New user registered: {user.email}")

    return Response({
        **UserProfileSerializer(user).data,
        **tokens_for(user),
    }, status=status.HTTP_201_CREATED)


class EmailTokenObtainPairView(TokenObtainPairView):
    serializer_class = EmailTokenObtainPairSerializer


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def profile_view(request):
    user = request.user
    if request.method == 'GET':
        return Response(UserProfileSerializer(user).data)

    serializer = UserProfileSerializer(user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    # fresh token so the client can swap it in after an edit
    return Response({**serializer.data, **tokens_for(user)})


# --- admin user management ---

@api_view(['GET'])
@permission_classes([IsAdminRole])
def admin_user_list(request):
    users = User.objects.all()
    return Response({'users': AdminUserSerializer(users, many=True).data})


@api_view(['PUT', 'DELETE'])
@permission_classes([IsAdminRole])
def admin_user_detail(request, pk):
    user = get_object_or_404(User, pk=pk)

    if request.method == 'DELETE':
        # soft delete, restore brings it back
        user.disabled = True
        user.save(update_fields=['disabled', 'updated_at'])
        logger.info(f"User {user.email} disabled by {request.user.email}")
        return Response({'message': 'User disabled (soft deleted)'})

    serializer = AdminUserSerializer(user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return Response({'message': 'User updated', 'user': serializer.data})


@api_view(['POST'])
@permission_classes([IsAdminRole])
def admin_user_restore(request, pk):
    user = get_object_or_404(User, pk=pk)
    user.disabled = False
    user.save(update_fields=['disabled', 'updated_at'])
    return Response({'message': 'User restored'})


@api_view(['DELETE'])
@permission_classes([IsAdminRole])
def admin_user_delete_permanent(request, pk):
    user = get_object_or_404(User, pk=pk)
    email = user.email
    user.delete()
    logger.warning(f"User {email} permanently deleted by {request.user.email}")
    return Response({'message': 'User permanently deleted'})


@api_view(['POST'])
@permission_classes([IsAdminRole])
def admin_user_message(request, pk):
    user = get_object_or_404(User, pk=pk)
    subject = request.data.get('subject') or 'Message from Vitabiotics'
    message = request.data.get('message') or ''
    send_sms_too = bool(request.data.get('send_sms'))

    if not user.email and not send_sms_too:
        return Response(
            {'message': 'User has no email; enable send_sms or update phone.'},
            status=status.HTTP_400_BAD_REQUEST,
        )

    results = {}
    if user.email:
        results['email'] = send_admin_message_email(user.email, subject, message)
    if send_sms_too and user.phone:
        results['sms'] = send_sms(user.phone, message or subject)

    return Response({'message': 'Message sent', 'results': results})


# --- debug ---

@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def inspect_token(request):
    """Decode the bearer token and report whether it verifies. DEBUG only."""
    auth = request.headers.get('Authorization', '')
    if not auth.startswith('Bearer '):
        return Response(
            {'message': 'No Bearer token provided in Authorization header'},
            status=status.HTTP_400_BAD_REQUEST,
        )

    token = auth.split(' ', 1)[1]
    try:
        decoded = {
            'header': jwt.get_unverified_header(token),
            'payload': jwt.decode(token, options={'verify_signature': False}),
        }
    except jwt.PyJWTError as e:
        return Response(
            {'message': 'Token could not be decoded', 'error': str(e)},
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    try:
        verified = dict(UntypedToken(token).payload)
    except TokenError as e:
        verified = {'error': str(e)}

    return Response({'decoded': decoded, 'verified': verified})
