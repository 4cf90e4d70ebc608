"""Status page view."""

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from django.shortcuts import render
from django.urls import reverse
from django.views.decorators.http import require_GET


@require_GET
def index(request: HttpRequest) -> HttpResponse:
    """Render the status page hosting the events grid."""
    context = {
        "base_url": settings.EVENTS_API_BASE_URL,
        "grid_data_url": reverse("api:status_grid_data"),
        "delete_event_url": reverse("api:status_delete_event"),
    }
    return render(request, "status/index.html", context)
