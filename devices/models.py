# devices/models.py
from django.conf import settings
from django.db import models
from django.utils import timezone


class Device(models.Model):
    """A client device a user has signed in from"""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='devices')
    device_id = models.CharField(max_length=200)  # Client-supplied identifier
    device_name = models.CharField(max_length=100, blank=True)

    # Verification state
    is_trusted = models.BooleanField(default=False)
    verified_at = models.DateTimeField(blank=True, null=True)
    last_login_at = models.DateTimeField(blank=True, null=True)

    # Metadata
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-last_login_at', '-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'device_id'], name='unique_device_per_user'),
        ]
        indexes = [
            models.Index(fields=['user', 'is_trusted'], name='devices_user_trusted_idx'),
        ]

    def __str__(self):
        label = self.device_name or self.device_id
        return f"{label} - {self.user.email}"

    def mark_trusted(self, save=True):
        """Mark the device as verified for its owner"""
        now = timezone.now()
        self.is_trusted = True
        self.verified_at = now
        self.last_login_at = now
        if save:
            self.save()

    def touch_login(self, save=True):
        self.last_login_at = timezone.now()
        if save:
            self.save(update_fields=['last_login_at', 'updated_at'])
