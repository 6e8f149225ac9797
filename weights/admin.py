from django.contrib import admin
from django.contrib.admin import SimpleListFilter
from django.utils import timezone

from .models import WeightLog, WeightGoal


# ============================================================
# CUSTOM FILTERS
# ============================================================

class DateRangeFilter(SimpleListFilter):
    title = 'Date Range'
    parameter_name = 'date_range'

    def lookups(self, request, model_admin):
        return [
            ('today', 'Today'),
            ('last_7_days', 'Last 7 Days'),
            ('last_28_days', 'Last 28 Days'),
        ]

    def queryset(self, request, queryset):
        today = timezone.localdate()

        if self.value() == 'today':
            return queryset.filter(date=today)
        elif self.value() == 'last_7_days':
            return queryset.filter(date__gte=today - timezone.timedelta(days=7))
        elif self.value() == 'last_28_days':
            return queryset.filter(date__gte=today - timezone.timedelta(days=28))


# ============================================================
# ADMIN CLASSES
# ============================================================

@admin.register(WeightLog)
class WeightLogAdmin(admin.ModelAdmin):
    list_display = ('user_email', 'date', 'am_weight', 'pm_weight', 'daily_average_display')
    list_filter = (DateRangeFilter, 'user')
    search_fields = ('user__email', 'note')
    readonly_fields = ('created_at', 'updated_at')
    list_per_page = 50
    date_hierarchy = 'date'

    fieldsets = (
        ('Basic Information', {
            'fields': ('user', 'date', 'am_weight', 'pm_weight', 'note')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def user_email(self, obj):
        return obj.user.email
    user_email.short_description = 'User'
    user_email.admin_order_field = 'user__email'

    def daily_average_display(self, obj):
        value = obj.daily_average
        return f"{value:.2f}" if value is not None else '-'
    daily_average_display.short_description = 'Daily Avg'


@admin.register(WeightGoal)
class WeightGoalAdmin(admin.ModelAdmin):
    list_display = ('user_email', 'target_weight', 'start_weight', 'target_date',
                    'is_active', 'is_achieved')
    list_filter = ('is_active', 'is_achieved', 'user')
    search_fields = ('user__email', 'note')
    readonly_fields = ('created_at', 'updated_at', 'achieved_at')
    list_per_page = 30

    fieldsets = (
        ('Basic Information', {
            'fields': ('user', 'target_weight', 'start_weight', 'note')
        }),
        ('Timeframe', {
            'fields': ('start_date', 'target_date')
        }),
        ('Status', {
            'fields': ('is_active', 'is_achieved', 'achieved_at')
        }),
    )

    actions = ['activate_goals', 'deactivate_goals']

    def user_email(self, obj):
        return obj.user.email
    user_email.short_description = 'User'
    user_email.admin_order_field = 'user__email'

    def activate_goals(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f'{updated} goals activated.')
    activate_goals.short_description = 'Activate selected goals'

    def deactivate_goals(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f'{updated} goals deactivated.')
    deactivate_goals.short_description = 'Deactivate selected goals'
