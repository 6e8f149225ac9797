"""Pytest fixtures for the weights backend tests."""

from __future__ import annotations

from datetime import date, timedelta

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from devices.services import DeviceVerificationService
from users.models import User
from users.serializers import issue_tokens
from weights.models import WeightLog

PASSWORD = "Tr1cky-Scale-Reading"


@pytest.fixture(autouse=True)
def clear_cache():
    """Passcodes live in the cache; start every test without any."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user(db):
    user = User.objects.create_user(email="sam@example.com", password=PASSWORD)
    DeviceVerificationService(user).register_trusted("laptop-1", "Laptop")
    return user


@pytest.fixture
def other_user(db):
    return User.objects.create_user(email="alex@example.com", password=PASSWORD)


@pytest.fixture
def auth_client(user):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_tokens(user)['token']}")
    return client


@pytest.fixture
def log_days(user):
    """Create one log per (days_ago, am, pm) relative to an anchor date."""

    def _create(anchor: date, rows, owner=None):
        owner = owner or user
        for days_ago, am, pm in rows:
            WeightLog.objects.create(
                user=owner,
                date=anchor - timedelta(days=days_ago),
                am_weight=am,
                pm_weight=pm,
            )

    return _create
