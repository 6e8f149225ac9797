from rest_framework import serializers

from .models import Device


class DeviceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Device
        fields = [
            'id', 'device_id', 'device_name', 'is_trusted',
            'verified_at', 'last_login_at', 'created_at'
        ]
        read_only_fields = fields


class VerifyDeviceSerializer(serializers.Serializer):
    email = serializers.EmailField()
    device_id = serializers.CharField(max_length=200)
    otp = serializers.CharField(max_length=12)
    device_name = serializers.CharField(required=False, allow_blank=True, max_length=100)

    def validate_otp(self, value):
        value = value.strip()
        if not value.isdigit():
            raise serializers.ValidationError("Code must be numeric")
        return value
