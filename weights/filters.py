import django_filters

from .models import WeightLog, WeightGoal


class WeightLogFilter(django_filters.FilterSet):
    date_after = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    date_before = django_filters.DateFilter(field_name='date', lookup_expr='lte')

    class Meta:
        model = WeightLog
        fields = ['date']


class WeightGoalFilter(django_filters.FilterSet):
    class Meta:
        model = WeightGoal
        fields = ['is_active', 'is_achieved']
