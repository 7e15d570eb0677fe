"""
Settings access for taskboard.

Configuration lives in the ``TASKBOARD`` Django setting::

    TASKBOARD = {
        "BACKEND": "taskboard.repository.DjangoTaskRepository",
        "OPTIONS": {"DEFAULT_PAGE_SIZE": None, "MAX_PAGE_SIZE": 100},
    }

Missing keys fall back to ``DEFAULTS``. The shared repository instance is
rebuilt whenever the setting changes (e.g. under ``override_settings``).
"""

import logging
import threading
from typing import Any

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver

from .repository import DEFAULT_BACKEND, RepositoryFactory, TaskRepository


logger = logging.getLogger(__name__)

SETTING_NAME = "TASKBOARD"

DEFAULT_OPTIONS: dict[str, Any] = {
    "DEFAULT_PAGE_SIZE": None,
    "MAX_PAGE_SIZE": 100,
}

DEFAULTS: dict[str, Any] = {
    "BACKEND": DEFAULT_BACKEND,
    "OPTIONS": DEFAULT_OPTIONS,
}

_repository: TaskRepository | None = None
_repository_lock = threading.Lock()


def get_config() -> dict[str, Any]:
    """``TASKBOARD`` merged over the defaults, one level deep for OPTIONS."""
    user_config = getattr(settings, SETTING_NAME, None) or {}
    return {
        "BACKEND": user_config.get("BACKEND", DEFAULTS["BACKEND"]),
        "OPTIONS": {**DEFAULT_OPTIONS, **user_config.get("OPTIONS", {})},
    }


def get_option(name: str) -> Any:
    """Single value from ``TASKBOARD["OPTIONS"]``."""
    return get_config()["OPTIONS"].get(name)


def get_repository() -> TaskRepository:
    """Process-wide repository built from settings on first use."""
    global _repository
    with _repository_lock:
        if _repository is None:
            config = get_config()
            try:
                _repository = RepositoryFactory.create_backend(config)
            except ValueError:
                logger.error("cannot create task repository from %r", config)
                raise
            logger.info("Task repository ready: %r", _repository)
        return _repository


def reset_repository() -> None:
    """Drop the shared repository so the next call rebuilds it."""
    global _repository
    with _repository_lock:
        _repository = None


@receiver(setting_changed)
def _reset_on_setting_changed(*, setting: str, **_kwargs: object) -> None:
    if setting == SETTING_NAME:
        reset_repository()
