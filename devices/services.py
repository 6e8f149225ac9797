import logging
from typing import Optional

from django.conf import settings
from django.core.mail import send_mail

from .models import Device
from .otp import PasscodeStore

logger = logging.getLogger(__name__)


class PasscodeDeliveryError(Exception):
    """Raised when a verification email could not be sent"""


def send_passcode(user, code: str, device_name: Optional[str] = None) -> None:
    """Email a one-time passcode to the user"""
    label = device_name or "a new device"
    message = (
        f"A sign-in was requested from {label}.\n\n"
        f"Your verification code is {code}.\n"
        f"It expires in {settings.OTP_TTL_SECONDS // 60} minutes.\n\n"
        "If this wasn't you, change your password."
    )
    try:
        send_mail(
            subject="Your verification code",
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[user.email],
            fail_silently=False,
        )
    except Exception as e:
        logger.error(f"Failed to send passcode to user {user.pk}: {e}")
        raise PasscodeDeliveryError(str(e)) from e


class DeviceVerificationService:
    """Trusted-device checks and the passcode round trip"""

    def __init__(self, user, store: Optional[PasscodeStore] = None):
        self.user = user
        self.store = store or PasscodeStore()

    def is_trusted(self, device_id: str) -> bool:
        return Device.objects.filter(user=self.user, device_id=device_id, is_trusted=True).exists()

    def register_trusted(self, device_id: str, device_name: str = "") -> Device:
        device, _ = Device.objects.get_or_create(
            user=self.user,
            device_id=device_id,
            defaults={'device_name': device_name or ""},
        )
        if device_name and device.device_name != device_name:
            device.device_name = device_name
        device.mark_trusted()
        logger.info(f"Device {device.pk} trusted for user {self.user.pk}")
        return device

    def record_login(self, device_id: str) -> None:
        device = Device.objects.get(user=self.user, device_id=device_id)
        device.touch_login()

    def start(self, device_id: str, device_name: str = "") -> None:
        """Issue a passcode for an unverified device and email it"""
        Device.objects.get_or_create(
            user=self.user,
            device_id=device_id,
            defaults={'device_name': device_name or ""},
        )
        code = self.store.issue(self.user, device_id)
        try:
            send_passcode(self.user, code, device_name)
        except PasscodeDeliveryError:
            self.store.discard(self.user, device_id)
            raise

    def complete(self, device_id: str, code: str, device_name: str = "") -> Optional[Device]:
        """Trust the device when the passcode matches, else None"""
        if not self.store.verify(self.user, device_id, code):
            logger.warning(f"Device verification failed for user {self.user.pk}")
            return None
        return self.register_trusted(device_id, device_name)
