"""
HTTP CRUD adapter over the task repository.

Views parse JSON in, call exactly one repository operation and serialize the
result. ``TaskAPIView.dispatch`` is the only place where repository errors
turn into HTTP status codes.
"""

import logging
from typing import Any

from django.db import DatabaseError, connections
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET

from .conf import get_option, get_repository
from .exceptions import NotFoundError, StorageError, ValidationError
from .repository import TaskRepository
from .serializers import (
    MalformedPayload,
    parse_bool_param,
    parse_int_param,
    parse_task_payload,
    task_to_dict,
)


logger = logging.getLogger(__name__)


def error_response(
    kind: str, message: str, status: int, **extra: Any
) -> JsonResponse:
    """JSON error body: ``{"error": kind, "message": message, ...extra}``."""
    return JsonResponse({"error": kind, "message": message, **extra}, status=status)


@method_decorator(csrf_exempt, name="dispatch")
class TaskAPIView(View):
    """Base view translating repository errors into responses."""

    # set through as_view(repository=...) to bypass the settings-built one
    repository: TaskRepository | None = None

    def get_repository(self) -> TaskRepository:
        """Repository for this request."""
        if self.repository is not None:
            return self.repository
        return get_repository()

    def dispatch(self, request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        """Run the handler; map TaskError subclasses to 400/404/500."""
        try:
            return super().dispatch(request, *args, **kwargs)
        except MalformedPayload as e:
            return error_response("bad_request", str(e), 400)
        except ValidationError as e:
            return error_response("validation_error", e.message, 400, field=e.field)
        except NotFoundError as e:
            return error_response("not_found", str(e), 404)
        except StorageError:
            return error_response("storage_error", "Task storage failed.", 500)


class TaskListView(TaskAPIView):
    """``GET`` lists tasks, ``POST`` creates one."""

    http_method_names = ["get", "post", "options"]

    def _page_size(self, requested: int | None) -> int | None:
        if requested is None:
            return get_option("DEFAULT_PAGE_SIZE")
        if (max_size := get_option("MAX_PAGE_SIZE")) is not None:
            return min(requested, max_size)
        return requested

    def get(self, request: HttpRequest) -> JsonResponse:
        repository = self.get_repository()
        completed = parse_bool_param("completed", request.GET.get("completed"))
        limit = self._page_size(parse_int_param("limit", request.GET.get("limit")))
        offset = parse_int_param("offset", request.GET.get("offset")) or 0
        tasks = repository.list(
            completed=completed,
            order_by=request.GET.get("order") or None,
            limit=limit,
            offset=offset,
        )
        response = JsonResponse([task_to_dict(task) for task in tasks], safe=False)
        response["X-Total-Count"] = str(repository.count(completed=completed))
        return response

    def post(self, request: HttpRequest) -> JsonResponse:
        fields = parse_task_payload(request.body)
        task = self.get_repository().create(**fields)
        return JsonResponse(task_to_dict(task), status=201)


class TaskDetailView(TaskAPIView):
    """Read, change or delete one task by id."""

    http_method_names = ["get", "put", "patch", "delete", "options"]

    def get(self, request: HttpRequest, task_id: str) -> JsonResponse:
        return JsonResponse(task_to_dict(self.get_repository().get(task_id)))

    def put(self, request: HttpRequest, task_id: str) -> JsonResponse:
        # PUT takes partial bodies too, the way existing clients send them
        fields = parse_task_payload(request.body)
        task = self.get_repository().update(task_id, **fields)
        return JsonResponse(task_to_dict(task))

    patch = put

    def delete(self, request: HttpRequest, task_id: str) -> HttpResponse:
        self.get_repository().delete(task_id)
        return HttpResponse(status=204)


@require_GET
def health(request: HttpRequest) -> JsonResponse:
    """Liveness plus a database round trip."""
    alias = get_option("DATABASE") or "default"
    try:
        connections[alias].ensure_connection()
    except DatabaseError as e:
        logger.warning("health check: database '%s' unavailable: %s", alias, e)
        return JsonResponse(
            {
                "status": "error",
                "message": "Database unavailable",
                "database": "unavailable",
            },
            status=503,
        )
    return JsonResponse(
        {"status": "ok", "message": "Server is running", "database": "ok"}
    )
