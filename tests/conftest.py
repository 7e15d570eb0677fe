import itertools
import sys
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path

import django
import pytest
from django.conf import settings

# add project root to python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def pytest_configure() -> None:
    """Configure django settings for tests."""
    if settings.configured:
        return
    settings.configure(
        DEBUG=True,
        DATABASES={
            "default": {
                "ENGINE": "django.db.backends.sqlite3",
                "NAME": ":memory:",
            }
        },
        INSTALLED_APPS=[
            "django.contrib.admin",
            "django.contrib.auth",
            "django.contrib.contenttypes",
            "django.contrib.sessions",
            "django.contrib.messages",
            "taskboard",
        ],
        MIDDLEWARE=[
            "django.middleware.security.SecurityMiddleware",
            "django.contrib.sessions.middleware.SessionMiddleware",
            "django.middleware.common.CommonMiddleware",
            "django.middleware.csrf.CsrfViewMiddleware",
            "django.contrib.auth.middleware.AuthenticationMiddleware",
            "django.contrib.messages.middleware.MessageMiddleware",
        ],
        ROOT_URLCONF="tests.urls",
        SECRET_KEY="test-secret-key",
        USE_TZ=True,
        TIME_ZONE="UTC",
        TASKBOARD={
            "BACKEND": "taskboard.repository.DjangoTaskRepository",
            "OPTIONS": {"MAX_PAGE_SIZE": 50},
        },
    )
    django.setup()


class TickingClock:
    """Clock that moves forward one millisecond on every call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.start = start or datetime(2025, 1, 1, tzinfo=timezone.utc)
        self._ticks = itertools.count()

    def __call__(self) -> datetime:
        return self.start + timedelta(milliseconds=next(self._ticks))


@pytest.fixture()
def clock() -> TickingClock:
    """Deterministic, strictly increasing clock."""
    return TickingClock()


@pytest.fixture(params=["memory", "django"])
def repository(request: pytest.FixtureRequest, clock: Callable[[], datetime]):
    """Each repository backend in turn, sharing one contract."""
    from taskboard.repository import DjangoTaskRepository, InMemoryTaskRepository

    if request.param == "django":
        request.getfixturevalue("db")
        return DjangoTaskRepository(clock=clock)
    return InMemoryTaskRepository(clock=clock)
