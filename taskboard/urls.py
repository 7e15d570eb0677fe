"""
URL configuration for the task API.

Mount it under any prefix::

    path("api/", include("taskboard.urls"))

Trailing slashes are optional so ``POST /api/tasks`` works without a
redirect.
"""

from django.urls import re_path

from . import views


app_name = "taskboard"
urlpatterns = [
    re_path(r"^tasks/?$", views.TaskListView.as_view(), name="task-list"),
    re_path(
        r"^tasks/(?P<task_id>[^/]+)/?$",
        views.TaskDetailView.as_view(),
        name="task-detail",
    ),
    re_path(r"^health/?$", views.health, name="health"),
]
