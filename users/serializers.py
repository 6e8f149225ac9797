from django.contrib.auth import password_validation
from rest_framework import serializers
from rest_framework_simplejwt.tokens import RefreshToken

from .models import User


def issue_tokens(user):
    """Access/refresh pair in the shape every auth endpoint returns."""
    refresh = RefreshToken.for_user(user)
    refresh['email'] = user.email
    return {
        "token": str(refresh.access_token),
        "refresh": str(refresh),
    }


class UserSerializer(serializers.ModelSerializer):
    full_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'first_name', 'last_name',
                  'full_name', 'date_joined']
        read_only_fields = ['id', 'email', 'date_joined']

    def get_full_name(self, obj):
        return obj.get_full_name()


class SignupSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True)
    device_id = serializers.CharField(write_only=True, required=False, max_length=200)
    device_name = serializers.CharField(write_only=True, required=False, allow_blank=True, max_length=100)

    class Meta:
        model = User
        fields = ['email', 'password', 'first_name', 'last_name', 'device_id', 'device_name']
        extra_kwargs = {
            # uniqueness is reported by the view with its own message
            'email': {'validators': []},
        }

    def validate_email(self, value):
        return User.objects.normalize_email(value)

    def validate(self, data):
        candidate = User(email=data.get('email'))
        password_validation.validate_password(data['password'], user=candidate)
        return data

    def create(self, validated_data):
        validated_data.pop('device_id', None)
        validated_data.pop('device_name', None)
        password = validated_data.pop('password')
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
    device_id = serializers.CharField(max_length=200)
    device_name = serializers.CharField(required=False, allow_blank=True, max_length=100)

    def validate_email(self, value):
        return User.objects.normalize_email(value)
