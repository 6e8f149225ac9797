from rest_framework import serializers
from django.utils import timezone

from .averages import BASE_FIELDS, EXTENDED_FIELDS
from .models import WeightLog, WeightGoal


class WeightLogSerializer(serializers.ModelSerializer):
    user = serializers.HiddenField(default=serializers.CurrentUserDefault())
    daily_average = serializers.FloatField(read_only=True)

    class Meta:
        model = WeightLog
        fields = [
            'id', 'user', 'date', 'am_weight', 'pm_weight', 'note',
            'daily_average', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        # one log per day is handled by the view as a merge
        validators = []

    def to_internal_value(self, data):
        # empty or zero weights mean "not logged"
        if hasattr(data, 'copy'):
            data = data.copy()
        for field in ('am_weight', 'pm_weight'):
            if field in data and data[field] in ('', 0, '0', None):
                data[field] = None
        if data.get('note') is None and 'note' in data:
            data['note'] = ''
        return super().to_internal_value(data)

    def validate_am_weight(self, value):
        return self._validate_weight(value)

    def validate_pm_weight(self, value):
        return self._validate_weight(value)

    def _validate_weight(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("Weight must be greater than 0")
        return value

    def validate_date(self, value):
        if value > timezone.localdate():
            raise serializers.ValidationError("Date cannot be in the future")
        return value


class AveragesSerializer(serializers.Serializer):
    """Flat averages record; None renders as null"""

    def __init__(self, *args, extended=False, **kwargs):
        super().__init__(*args, **kwargs)
        names = EXTENDED_FIELDS if extended else BASE_FIELDS
        for name in names:
            self.fields[name] = serializers.FloatField(allow_null=True, read_only=True)


class WeightGoalSerializer(serializers.ModelSerializer):
    user = serializers.HiddenField(default=serializers.CurrentUserDefault())
    days_remaining = serializers.IntegerField(read_only=True)

    class Meta:
        model = WeightGoal
        fields = [
            'id', 'user', 'target_weight', 'start_weight', 'start_date',
            'target_date', 'is_active', 'is_achieved', 'achieved_at',
            'note', 'days_remaining', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'is_achieved', 'achieved_at', 'created_at', 'updated_at']

    def validate(self, data):
        """Validate goal data"""
        instance = self.instance
        start_date = data.get('start_date', getattr(instance, 'start_date', None))
        target_date = data.get('target_date', getattr(instance, 'target_date', None))
        if start_date and target_date and target_date < start_date:
            raise serializers.ValidationError({
                'target_date': 'Target date must be after start date'
            })

        target_weight = data.get('target_weight', getattr(instance, 'target_weight', None))
        if target_weight is not None and target_weight <= 0:
            raise serializers.ValidationError({
                'target_weight': 'Target weight must be greater than 0'
            })

        start_weight = data.get('start_weight')
        if start_weight is not None and start_weight <= 0:
            raise serializers.ValidationError({
                'start_weight': 'Start weight must be greater than 0'
            })

        return data


class GoalProgressSerializer(serializers.Serializer):
    goal_id = serializers.IntegerField()
    status = serializers.CharField()
    target_weight = serializers.FloatField()
    start_weight = serializers.FloatField(required=False)
    current_weight = serializers.FloatField(allow_null=True)
    remaining = serializers.FloatField(required=False)
    progress_percentage = serializers.FloatField(required=False)
    weekly_rate = serializers.FloatField(allow_null=True, required=False)
    projected_date = serializers.DateField(allow_null=True, required=False)
    days_remaining = serializers.IntegerField(allow_null=True, required=False)
    is_on_track = serializers.BooleanField(allow_null=True, required=False)
    is_achieved = serializers.BooleanField(required=False)
