from django.apps import AppConfig


class TaskboardConfig(AppConfig):
    name = "taskboard"
    verbose_name = "Taskboard"

    def ready(self) -> None:
        from . import checks  # noqa: F401
        from . import conf  # noqa: F401
