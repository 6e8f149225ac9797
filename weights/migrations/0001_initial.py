import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='WeightLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField()),
                ('am_weight', models.FloatField(blank=True, help_text='Morning weight', null=True, validators=[django.core.validators.MinValueValidator(0.1)])),
                ('pm_weight', models.FloatField(blank=True, help_text='Evening weight', null=True, validators=[django.core.validators.MinValueValidator(0.1)])),
                ('note', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='weight_logs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Weight Log',
                'verbose_name_plural': 'Weight Logs',
                'db_table': 'weight_logs',
                'ordering': ['-date'],
                'indexes': [models.Index(fields=['user', '-date'], name='weight_logs_user_date_idx')],
                'constraints': [models.UniqueConstraint(fields=('user', 'date'), name='unique_weight_log_per_day')],
            },
        ),
        migrations.CreateModel(
            name='WeightGoal',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('target_weight', models.FloatField(help_text='Weight to reach')),
                ('start_weight', models.FloatField(blank=True, help_text='Weight when the goal was set', null=True)),
                ('start_date', models.DateField(default=django.utils.timezone.localdate)),
                ('target_date', models.DateField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('is_achieved', models.BooleanField(default=False)),
                ('achieved_at', models.DateTimeField(blank=True, null=True)),
                ('note', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='weight_goals', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Weight Goal',
                'verbose_name_plural': 'Weight Goals',
                'db_table': 'weight_goals',
                'ordering': ['-is_active', '-created_at'],
                'indexes': [models.Index(fields=['user', 'is_active'], name='weight_goals_user_active_idx')],
            },
        ),
    ]
