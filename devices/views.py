import logging

from rest_framework import mixins, permissions, status, viewsets
from rest_framework.response import Response
from rest_framework.views import APIView

from users.models import User
from users.serializers import issue_tokens
from .models import Device
from .permissions import IsDeviceOwner
from .serializers import DeviceSerializer, VerifyDeviceSerializer
from .services import DeviceVerificationService

logger = logging.getLogger(__name__)


class VerifyDeviceView(APIView):
    """Exchange an emailed passcode for tokens and trust the device"""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = VerifyDeviceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            user = User.objects.get(email__iexact=data['email'], is_active=True)
        except User.DoesNotExist:
            return Response({'error': 'Invalid or expired code'}, status=status.HTTP_400_BAD_REQUEST)

        service = DeviceVerificationService(user)
        device = service.complete(data['device_id'], data['otp'], data.get('device_name', ''))
        if device is None:
            return Response({'error': 'Invalid or expired code'}, status=status.HTTP_400_BAD_REQUEST)

        return Response(issue_tokens(user), status=status.HTTP_200_OK)


class DeviceViewSet(mixins.ListModelMixin,
                    mixins.RetrieveModelMixin,
                    mixins.DestroyModelMixin,
                    viewsets.GenericViewSet):
    """ViewSet for the user's known devices"""
    serializer_class = DeviceSerializer
    permission_classes = [permissions.IsAuthenticated, IsDeviceOwner]

    def get_queryset(self):
        return Device.objects.filter(user=self.request.user)

    def perform_destroy(self, instance):
        logger.info(f"Revoking device {instance.pk} for user {self.request.user.pk}")
        instance.delete()
