import logging

from django.contrib.auth import authenticate
from django.db import IntegrityError, transaction
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenRefreshView

from devices.services import DeviceVerificationService, PasscodeDeliveryError
from .models import User
from .serializers import LoginSerializer, SignupSerializer, UserSerializer, issue_tokens

logger = logging.getLogger(__name__)


class SignupView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data['email']

        if User.objects.filter(email__iexact=email).exists():
            return Response({'error': 'Email already exists'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            with transaction.atomic():
                user = serializer.save()
        except IntegrityError:
            return Response({'error': 'Email already exists'}, status=status.HTTP_400_BAD_REQUEST)

        device_id = serializer.validated_data.get('device_id')
        if device_id:
            DeviceVerificationService(user).register_trusted(
                device_id, serializer.validated_data.get('device_name', '')
            )

        logger.info(f"Created user {user.pk}")
        return Response(issue_tokens(user), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user = authenticate(request, email=data['email'], password=data['password'])
        if user is None:
            return Response({'error': 'Invalid credentials'}, status=status.HTTP_400_BAD_REQUEST)

        service = DeviceVerificationService(user)
        device_id = data['device_id']
        device_name = data.get('device_name', '')

        if service.is_trusted(device_id):
            service.record_login(device_id)
            return Response(issue_tokens(user))

        try:
            service.start(device_id, device_name)
        except PasscodeDeliveryError:
            return Response(
                {'error': 'Failed to send verification code'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response(
            {'verification_required': True, 'device_id': device_id},
            status=status.HTTP_202_ACCEPTED
        )


class UserProfileView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        serializer = UserSerializer(request.user)
        return Response(serializer.data)

    def patch(self, request):
        serializer = UserSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data, status=status.HTTP_200_OK)


class RefreshView(TokenRefreshView):
    pass
