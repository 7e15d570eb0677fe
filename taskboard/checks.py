from typing import Any

from django.conf import settings
from django.core.checks import CheckMessage, Error, Tags, register

from .conf import SETTING_NAME
from .repository import RepositoryFactory


PAGE_SIZE_OPTIONS = ("DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE")


def _is_page_size(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@register(Tags.compatibility)
def check_taskboard_configuration(
    app_configs: Any, **kwargs: Any
) -> list[CheckMessage]:
    """Check TASKBOARD configuration for errors."""
    errors: list[CheckMessage] = []

    # no configuration means defaults will be used
    if (config := getattr(settings, SETTING_NAME, None)) is None:
        return []

    if not isinstance(config, dict):
        errors.append(
            Error(
                "TASKBOARD must be a dictionary.",
                obj=settings,
                id="taskboard.E001",
            )
        )
        return errors

    # check backend validity
    backend = config.get("BACKEND")
    if backend is not None and not RepositoryFactory.is_known(backend):
        errors.append(
            Error(
                f'TASKBOARD specifies unknown backend "{backend}".',
                obj=settings,
                id="taskboard.E002",
            )
        )

    # check OPTIONS
    if not isinstance(options := config.get("OPTIONS", {}), dict):
        errors.append(
            Error(
                "TASKBOARD.OPTIONS must be a dictionary.",
                obj=settings,
                id="taskboard.E003",
            )
        )
        return errors

    for name in PAGE_SIZE_OPTIONS:
        if name not in options:
            continue
        value = options[name]
        if name == "DEFAULT_PAGE_SIZE" and value is None:
            continue
        if not _is_page_size(value):
            errors.append(
                Error(
                    f"TASKBOARD.OPTIONS.{name} must be a positive integer.",
                    obj=settings,
                    id="taskboard.E004",
                )
            )

    default_size = options.get("DEFAULT_PAGE_SIZE")
    max_size = options.get("MAX_PAGE_SIZE")
    if _is_page_size(default_size) and _is_page_size(max_size) and default_size > max_size:
        errors.append(
            Error(
                "TASKBOARD.OPTIONS.DEFAULT_PAGE_SIZE must not exceed MAX_PAGE_SIZE.",
                obj=settings,
                id="taskboard.E005",
            )
        )

    return errors
