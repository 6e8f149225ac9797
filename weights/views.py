from datetime import datetime
import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, permissions, serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from .filters import WeightGoalFilter, WeightLogFilter
from .models import WeightGoal, WeightLog
from .serializers import (
    AveragesSerializer, GoalProgressSerializer, WeightGoalSerializer, WeightLogSerializer
)
from .services import AveragesService, GoalProgressService, latest_weight

logger = logging.getLogger(__name__)


class WeightLogViewSet(viewsets.ModelViewSet):
    """ViewSet for daily AM/PM weight logs"""
    serializer_class = WeightLogSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = WeightLogFilter
    ordering_fields = ['date', 'created_at']
    ordering = ['-date']

    def get_queryset(self):
        return WeightLog.objects.filter(user=self.request.user)

    def create(self, request, *args, **kwargs):
        """Create the day's log, or merge into the one already there"""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        existing = self.get_queryset().filter(date=data['date']).first()
        if existing is None:
            self.perform_create(serializer)
            return Response(serializer.data, status=status.HTTP_201_CREATED)

        for field in ('am_weight', 'pm_weight'):
            if data.get(field) is not None:
                setattr(existing, field, data[field])
        if data.get('note'):
            existing.note = data['note']
        existing.save()

        logger.info(f"Merged weight log {existing.pk} for user {request.user.pk}")
        return Response(self.get_serializer(existing).data, status=status.HTTP_200_OK)

    def perform_update(self, serializer):
        new_date = serializer.validated_data.get('date')
        if new_date is not None:
            clash = self.get_queryset().filter(date=new_date).exclude(pk=serializer.instance.pk)
            if clash.exists():
                raise serializers.ValidationError({'date': 'A log already exists for this date'})
        serializer.save()


def _parse_as_of(request):
    """Optional ``as_of`` override for today's date"""
    raw = request.query_params.get('as_of')
    if not raw:
        return None
    try:
        return datetime.strptime(raw, '%Y-%m-%d').date()
    except ValueError:
        raise serializers.ValidationError({'as_of': 'Use the YYYY-MM-DD format'})


class AveragesView(APIView):
    """Rolling weight averages for the authenticated user"""
    permission_classes = [permissions.IsAuthenticated]
    extended = False

    def get(self, request):
        today = _parse_as_of(request)

        try:
            averages = AveragesService(request.user).calculate(today, extended=self.extended)
        except Exception as e:
            logger.error(f"Averages failed for user {request.user.pk}: {e}", exc_info=True)
            return Response(
                {'error': 'Failed to calculate averages'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        serializer = AveragesSerializer(averages, extended=self.extended)
        return Response(serializer.data)


class ExtendedAveragesView(AveragesView):
    """Averages plus yesterday and the previous calendar week"""
    extended = True


class WeightGoalViewSet(viewsets.ModelViewSet):
    """ViewSet for weight goals"""
    serializer_class = WeightGoalSerializer
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = WeightGoalFilter
    ordering_fields = ['created_at', 'target_date', 'target_weight']
    ordering = ['-is_active', '-created_at']

    def get_queryset(self):
        return WeightGoal.objects.filter(user=self.request.user)

    def perform_create(self, serializer):
        if serializer.validated_data.get('start_weight') is None:
            serializer.save(start_weight=latest_weight(self.request.user))
        else:
            serializer.save()

    @action(detail=False, methods=['get'])
    def active(self, request):
        """Get active weight goals"""
        goals = self.filter_queryset(self.get_queryset()).filter(is_active=True)
        serializer = self.get_serializer(goals, many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['get'])
    def progress(self, request, pk=None):
        """Progress towards one goal"""
        goal = self.get_object()
        today = _parse_as_of(request)

        result = GoalProgressService(goal).progress(today)
        return Response(GoalProgressSerializer(result).data)
