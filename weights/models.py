from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from .averages import DailySample


class WeightLog(models.Model):
    """AM/PM weight entry for one calendar day"""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='weight_logs'
    )
    date = models.DateField()
    am_weight = models.FloatField(
        null=True, blank=True,
        validators=[MinValueValidator(0.1)],
        help_text="Morning weight"
    )
    pm_weight = models.FloatField(
        null=True, blank=True,
        validators=[MinValueValidator(0.1)],
        help_text="Evening weight"
    )
    note = models.TextField(blank=True, default='')

    # Metadata
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'weight_logs'
        ordering = ['-date']
        constraints = [
            models.UniqueConstraint(fields=['user', 'date'], name='unique_weight_log_per_day'),
        ]
        indexes = [
            models.Index(fields=['user', '-date'], name='weight_logs_user_date_idx'),
        ]
        verbose_name = 'Weight Log'
        verbose_name_plural = 'Weight Logs'

    def __str__(self):
        return f"{self.user.email}: {self.date}"

    def as_sample(self):
        return DailySample(date=self.date, am_weight=self.am_weight, pm_weight=self.pm_weight)

    @property
    def daily_average(self):
        """Mean of AM and PM, whichever are present"""
        return self.as_sample().daily_average


class WeightGoal(models.Model):
    """Target weight a user is working towards"""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='weight_goals'
    )
    target_weight = models.FloatField(help_text="Weight to reach")
    start_weight = models.FloatField(null=True, blank=True, help_text="Weight when the goal was set")

    # Timeframe
    start_date = models.DateField(default=timezone.localdate)
    target_date = models.DateField(null=True, blank=True)

    # Progress tracking
    is_active = models.BooleanField(default=True)
    is_achieved = models.BooleanField(default=False)
    achieved_at = models.DateTimeField(null=True, blank=True)

    note = models.TextField(blank=True, default='')

    # Metadata
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'weight_goals'
        indexes = [
            models.Index(fields=['user', 'is_active'], name='weight_goals_user_active_idx'),
        ]
        ordering = ['-is_active', '-created_at']
        verbose_name = 'Weight Goal'
        verbose_name_plural = 'Weight Goals'

    def __str__(self):
        return f"{self.user.email}: {self.target_weight}"

    @property
    def days_remaining(self):
        """Days left until the target date"""
        return self.days_remaining_on(timezone.localdate())

    def days_remaining_on(self, today):
        if not self.target_date:
            return None
        return max(0, (self.target_date - today).days)

    def mark_achieved(self, save=True):
        if self.is_achieved:
            return
        self.is_achieved = True
        self.achieved_at = timezone.now()
        if save:
            self.save(update_fields=['is_achieved', 'achieved_at', 'updated_at'])
