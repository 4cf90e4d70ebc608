"""URL configuration for the System Admin console.

The JSON endpoints live under ``/api/`` (django-ninja-extra); the status page
is a plain Django view.
"""

from django.conf import settings
from django.http import HttpRequest, HttpResponseRedirect
from django.shortcuts import redirect
from django.urls import include, path

from api.api import api


def redirect_to_status(request: HttpRequest) -> HttpResponseRedirect:
    """Redirect the site root to the status page."""
    return redirect("status:index")


urlpatterns = [
    path("", redirect_to_status, name="redirect_to_status"),
    path("api/", api.urls),
    path("status/", include("status.urls")),
]

if settings.DEBUG:  # pragma: no cover
    from django.contrib.staticfiles.urls import staticfiles_urlpatterns

    urlpatterns += staticfiles_urlpatterns()
